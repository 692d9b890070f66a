"""
Progress tracking: a user's traversal state through one route.

At most one UserRouteProgress exists per (user_id, route_id); writes go
through `EntityStore.upsert`, which serialises them per key.
"""
from typing import Any, List, Mapping, Optional, Union

from database import new_id, utcnow
from models.Route import Route
from models.RoutePhoto import RoutePhoto
from models.UserRouteProgress import UserRouteProgress
from schemas import ProgressUpsert, RoutePhotoCreate
from services.validation import parse_payload
from store import EntityStore
from utils.logger import get_logger

logger = get_logger("progress")


def _build_photos(photos: List[RoutePhotoCreate]) -> List[RoutePhoto]:
    return [
        RoutePhoto(
            id=photo.id or new_id(),
            position=position,
            stop_id=photo.stop_id,
            image_url=photo.image_url,
            caption=photo.caption,
            taken_at=photo.taken_at,
        )
        for position, photo in enumerate(photos)
    ]


def get_progress(store: EntityStore, user_id: str, route_id: str) -> Optional[UserRouteProgress]:
    return store.find(UserRouteProgress, user_id=user_id, route_id=route_id)


def upsert_progress(
    store: EntityStore,
    user_id: str,
    route_id: str,
    patch: Union[ProgressUpsert, Mapping[str, Any]],
) -> UserRouteProgress:
    """
    Create or merge the progress record for (user_id, route_id).

    Fields present in `patch` overwrite the stored ones. completed_at is
    stamped whenever the patch sets is_completed to true and is otherwise
    left as it was, even when is_completed goes back to false. started_at is
    fixed at creation. current_stop_index is not checked against the route.
    """
    progress_in = parse_payload(ProgressUpsert, patch, "Invalid progress data")
    fields = progress_in.model_fields_set

    def apply(progress: UserRouteProgress, created: bool) -> None:
        now = utcnow()
        if created:
            progress.started_at = now
            progress.completed_at = None
        if "current_stop_index" in fields:
            progress.current_stop_index = progress_in.current_stop_index
        if "is_completed" in fields:
            progress.is_completed = progress_in.is_completed
        if "photos_shared" in fields:
            progress.photos_shared = _build_photos(progress_in.photos_shared)
        if progress_in.is_completed:
            progress.completed_at = now

    progress = store.upsert(
        UserRouteProgress,
        {"user_id": user_id, "route_id": route_id},
        apply,
        defaults={"current_stop_index": 0, "is_completed": False, "photos_shared": []},
    )
    logger.info(
        "Progress %s user=%s route=%s stop=%s completed=%s",
        progress.id, user_id, route_id, progress.current_stop_index, progress.is_completed,
    )
    return progress


def completed_routes_for(store: EntityStore, user_id: str) -> List[Route]:
    """Routes the user has completed; routes that no longer exist are skipped."""
    with store.session() as db:
        return (
            db.query(Route)
            .join(
                UserRouteProgress,
                (UserRouteProgress.route_id == Route.id) & (UserRouteProgress.user_id == user_id),
            )
            .filter(UserRouteProgress.is_completed.is_(True))
            .all()
        )
