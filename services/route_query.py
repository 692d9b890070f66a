"""
Route discovery: filter and sort the published route catalogue.

Read-only; nothing here writes to the store.
"""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import desc

from models.Route import Route
from schemas import Bucket, Category, Difficulty
from store import EntityStore

ALL = "all"

# (upper bound of "short", upper bound of "medium"); "medium" is inclusive on both ends
DURATION_BOUNDS = (60, 180)  # minutes
DISTANCE_BOUNDS = (2, 5)  # km


@dataclass(frozen=True)
class RouteFilter:
    """Discovery filter; every field is optional and None means "no filtering".

    `matches_nothing` is set when a category or difficulty value names no
    known option: exact matching against it can never succeed.
    """
    category: Optional[Category] = None
    duration: Optional[Bucket] = None
    distance: Optional[Bucket] = None
    difficulty: Optional[Difficulty] = None
    matches_nothing: bool = False

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        duration: Optional[str] = None,
        distance: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> "RouteFilter":
        unknown = False

        def exact(enum_cls, value):
            nonlocal unknown
            if not value or value == ALL:
                return None
            try:
                return enum_cls(value)
            except ValueError:
                unknown = True
                return None

        def bucket(value):
            try:
                return Bucket(value) if value else None
            except ValueError:
                return None  # unrecognised buckets don't filter

        return cls(
            category=exact(Category, category),
            duration=bucket(duration),
            distance=bucket(distance),
            difficulty=exact(Difficulty, difficulty),
            matches_nothing=unknown,
        )


def _bucket_clause(column, bucket: Bucket, bounds):
    low, high = bounds
    if bucket is Bucket.SHORT:
        return column < low
    if bucket is Bucket.MEDIUM:
        return column.between(low, high)
    return column > high


def query_routes(store: EntityStore, route_filter: Optional[RouteFilter] = None) -> List[Route]:
    """Published routes matching every set filter, best rated first."""
    route_filter = route_filter or RouteFilter()
    if route_filter.matches_nothing:
        return []

    with store.session() as db:
        query = db.query(Route).filter(Route.is_published.is_(True))

        if route_filter.category is not None:
            query = query.filter(Route.category == route_filter.category.value)

        if route_filter.duration is not None:
            query = query.filter(_bucket_clause(Route.duration, route_filter.duration, DURATION_BOUNDS))

        if route_filter.distance is not None:
            query = query.filter(_bucket_clause(Route.distance, route_filter.distance, DISTANCE_BOUNDS))

        if route_filter.difficulty is not None:
            query = query.filter(Route.difficulty == route_filter.difficulty.value)

        return query.order_by(desc(Route.rating), Route.created_at).all()
