from typing import List
from fastapi import APIRouter, Depends, Response, status

from dependencies import get_store
from exceptions import NotFoundError
from schemas import RouteRead, SavedRouteCreate, SavedRouteRead
from services import saved_routes as saved_route_service
from store import EntityStore

router = APIRouter(prefix="/users/{user_id}/saved-routes", tags=["Saved Routes"])


@router.get("", response_model=List[RouteRead])
def get_saved_routes(user_id: str, store: EntityStore = Depends(get_store)):
    """
    Get all routes saved by a user.
    """
    return saved_route_service.saved_routes_for(store, user_id)


@router.post("", response_model=SavedRouteRead, status_code=status.HTTP_201_CREATED)
def save_route(user_id: str, payload: SavedRouteCreate, store: EntityStore = Depends(get_store)):
    """
    Save a route for later.
    Saving twice returns the existing bookmark.
    """
    return saved_route_service.save(store, user_id, payload.route_id)


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def unsave_route(user_id: str, route_id: str, store: EntityStore = Depends(get_store)):
    """
    Remove saved route.
    """
    if not saved_route_service.unsave(store, user_id, route_id):
        raise NotFoundError("Saved route")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
