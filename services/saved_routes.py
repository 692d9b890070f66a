from typing import List

from models.Route import Route
from models.SavedRoute import SavedRoute
from store import EntityStore
from utils.logger import get_logger

logger = get_logger("saved_routes")


def save(store: EntityStore, user_id: str, route_id: str) -> SavedRoute:
    """
    Bookmark a route for a user.
    Saving an already saved route returns the existing bookmark.
    """
    def keep(saved: SavedRoute, created: bool) -> None:
        if not created:
            logger.info("Route %s already saved by %s", route_id, user_id)

    return store.upsert(SavedRoute, {"user_id": user_id, "route_id": route_id}, keep)


def unsave(store: EntityStore, user_id: str, route_id: str) -> bool:
    """Remove a bookmark; False when there was nothing to remove."""
    return store.delete_first(SavedRoute, user_id=user_id, route_id=route_id)


def saved_routes_for(store: EntityStore, user_id: str) -> List[Route]:
    """Routes bookmarked by the user, most recent bookmark first.

    Bookmarks pointing at routes that no longer exist are dropped.
    """
    with store.session() as db:
        return (
            db.query(Route)
            .join(SavedRoute, SavedRoute.route_id == Route.id)
            .filter(SavedRoute.user_id == user_id)
            .order_by(SavedRoute.created_at.desc())
            .all()
        )
