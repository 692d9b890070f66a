import itertools

from models.Route import Route
from services.route_query import RouteFilter, query_routes
from schemas import Bucket, Category, Difficulty


def _ids(routes):
    return [route.id for route in routes]


def test_unpublished_routes_never_returned(store, make_route):
    hidden = make_route(isPublished=False, title="Draft route")
    make_route(title="Live route")

    options = {
        "category": [None, "all", "food-drink"],
        "duration": [None, "short", "medium", "long"],
        "distance": [None, "short", "medium", "long"],
        "difficulty": [None, "all", "easy"],
    }
    for values in itertools.product(*options.values()):
        route_filter = RouteFilter.from_query(**dict(zip(options, values)))
        assert hidden.id not in _ids(query_routes(store, route_filter))


def test_results_sorted_by_rating_descending(store, make_route):
    for rating in (3.1, 4.9, 0.0, 4.2, 4.9):
        make_route(rating=rating)

    ratings = [route.rating for route in query_routes(store)]

    assert len(ratings) == 5
    assert all(a >= b for a, b in zip(ratings, ratings[1:]))


def test_duration_buckets_edges(store, make_route):
    by_duration = {d: make_route(duration=d).id for d in (59, 60, 180, 181)}

    def durations(bucket):
        found = _ids(query_routes(store, RouteFilter.from_query(duration=bucket)))
        return sorted(d for d, route_id in by_duration.items() if route_id in found)

    assert durations("short") == [59]
    assert durations("medium") == [60, 180]
    assert durations("long") == [181]


def test_distance_buckets_edges(store, make_route):
    by_distance = {d: make_route(distance=d).id for d in (1.99, 2.0, 5.0, 5.01)}

    def distances(bucket):
        found = _ids(query_routes(store, RouteFilter(distance=Bucket(bucket))))
        return sorted(d for d, route_id in by_distance.items() if route_id in found)

    assert distances("short") == [1.99]
    assert distances("medium") == [2.0, 5.0]
    assert distances("long") == [5.01]


def test_food_tour_matches_medium_duration_short_distance(store, make_route):
    route = make_route(category="food-drink", duration=90, distance=1.8, difficulty="easy")

    found = query_routes(store, RouteFilter.from_query(duration="medium", distance="short"))
    assert route.id in _ids(found)

    assert route.id not in _ids(query_routes(store, RouteFilter.from_query(duration="long")))


def test_filters_compose_with_and(store, make_route):
    match = make_route(category="nightlife", difficulty="moderate", duration=200)
    make_route(category="nightlife", difficulty="easy", duration=200)
    make_route(category="culture-art", difficulty="moderate", duration=200)
    make_route(category="nightlife", difficulty="moderate", duration=30)

    route_filter = RouteFilter(
        category=Category.NIGHTLIFE,
        difficulty=Difficulty.MODERATE,
        duration=Bucket.LONG,
    )
    assert _ids(query_routes(store, route_filter)) == [match.id]


def test_all_and_missing_values_do_not_filter(store, make_route):
    make_route(category="food-drink", difficulty="easy")
    make_route(category="hidden-gems", difficulty="challenging")

    assert len(query_routes(store, RouteFilter.from_query(category="all", difficulty="all"))) == 2
    assert len(query_routes(store, None)) == 2


def test_unrecognised_bucket_applies_no_filtering(store, make_route):
    make_route(duration=30)
    make_route(duration=300)

    route_filter = RouteFilter.from_query(duration="forever", distance="far")
    assert route_filter.duration is None and route_filter.distance is None
    assert len(query_routes(store, route_filter)) == 2


def test_unknown_category_matches_nothing(store, make_route):
    make_route(category="food-drink")

    route_filter = RouteFilter.from_query(category="shopping")
    assert route_filter.matches_nothing
    assert query_routes(store, route_filter) == []


def test_query_does_not_modify_store(store, make_route):
    make_route(rating=2.0)
    make_route(rating=4.0, isPublished=False)
    before = sorted((r.id, r.rating, r.is_published) for r in store.list(Route))

    query_routes(store, RouteFilter.from_query(category="food-drink", duration="medium"))

    after = sorted((r.id, r.rating, r.is_published) for r in store.list(Route))
    assert before == after
