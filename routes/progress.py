from typing import List
from fastapi import APIRouter, Depends

from dependencies import get_store
from exceptions import NotFoundError
from schemas import ProgressRead, ProgressUpsert, RouteRead, ValidationErrorResponse
from services import progress as progress_service
from store import EntityStore

router = APIRouter(prefix="/users/{user_id}", tags=["Route Progress"])


@router.get("/routes/{route_id}/progress", response_model=ProgressRead)
def get_route_progress(user_id: str, route_id: str, store: EntityStore = Depends(get_store)):
    progress = progress_service.get_progress(store, user_id, route_id)
    if not progress:
        raise NotFoundError("Route progress")
    return progress


@router.post(
    "/routes/{route_id}/progress",
    response_model=ProgressRead,
    responses={400: {"model": ValidationErrorResponse}},
)
def upsert_route_progress(
    user_id: str,
    route_id: str,
    payload: ProgressUpsert,
    store: EntityStore = Depends(get_store),
):
    """
    Create or update the user's progress on a route.
    Only the fields sent are changed.
    """
    return progress_service.upsert_progress(store, user_id, route_id, payload)


@router.get("/completed-routes", response_model=List[RouteRead])
def get_completed_routes(user_id: str, store: EntityStore = Depends(get_store)):
    return progress_service.completed_routes_for(store, user_id)
