from fastapi import APIRouter, Depends, status
from typing import List, Optional

from dependencies import get_store
from exceptions import NotFoundError
from schemas import RouteCreate, RouteRead, RouteUpdate, ValidationErrorResponse
from services import route_query
from services import routes as route_service
from store import EntityStore

router = APIRouter(prefix="/routes", tags=["Routes"])


@router.get("", response_model=List[RouteRead])
def list_routes(
    category: Optional[str] = None,
    duration: Optional[str] = None,
    distance: Optional[str] = None,
    difficulty: Optional[str] = None,
    store: EntityStore = Depends(get_store),
):
    """
    Route discovery.
    Published routes only, filtered by category, duration bucket, distance
    bucket and difficulty ("all" or absent means no filtering), best rated first.
    """
    route_filter = route_query.RouteFilter.from_query(
        category=category,
        duration=duration,
        distance=distance,
        difficulty=difficulty,
    )
    return route_query.query_routes(store, route_filter)


@router.get("/{route_id}", response_model=RouteRead)
def get_route(route_id: str, store: EntityStore = Depends(get_store)):
    route = route_service.get_route(store, route_id)
    if not route:
        raise NotFoundError("Route")
    return route


@router.post(
    "",
    response_model=RouteRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}},
)
def create_route(payload: RouteCreate, store: EntityStore = Depends(get_store)):
    """
    Create a route with its ordered stops.
    Rating and review count start at zero.
    """
    return route_service.create_route(store, payload)


@router.patch("/{route_id}", response_model=RouteRead, responses={400: {"model": ValidationErrorResponse}})
def update_route(route_id: str, route_update: RouteUpdate, store: EntityStore = Depends(get_store)):
    """
    Partial update of a route (publish flag, rating, stops, ...).
    """
    route = route_service.update_route(store, route_id, route_update)
    if not route:
        raise NotFoundError("Route")
    return route
