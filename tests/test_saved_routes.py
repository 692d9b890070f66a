from models.SavedRoute import SavedRoute
from services.saved_routes import save, saved_routes_for, unsave


def test_unsave_missing_bookmark_returns_false(store, make_route):
    route = make_route()
    save(store, "u1", route.id)

    assert unsave(store, "u1", "not-saved") is False
    assert [(s.user_id, s.route_id) for s in store.list(SavedRoute)] == [("u1", route.id)]


def test_save_then_unsave_excludes_route(store, make_route):
    kept = make_route(title="Kept")
    dropped = make_route(title="Dropped")
    save(store, "u1", kept.id)
    save(store, "u1", dropped.id)

    assert unsave(store, "u1", dropped.id) is True

    assert [r.id for r in saved_routes_for(store, "u1")] == [kept.id]


def test_save_twice_returns_existing_bookmark(store, make_route):
    route = make_route()
    first = save(store, "u1", route.id)
    second = save(store, "u1", route.id)

    assert first.id == second.id
    assert first.created_at == second.created_at
    assert len(store.list(SavedRoute)) == 1


def test_saved_routes_skip_missing_routes(store, make_route):
    route = make_route()
    save(store, "u1", route.id)
    save(store, "u1", "deleted-route")

    assert [r.id for r in saved_routes_for(store, "u1")] == [route.id]


def test_bookmarks_are_per_user(store, make_route):
    route = make_route()
    save(store, "u1", route.id)

    assert saved_routes_for(store, "u2") == []
    assert unsave(store, "u2", route.id) is False
