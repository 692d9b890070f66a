import threading

import pytest

from exceptions import PayloadValidationError
from models.UserRouteProgress import UserRouteProgress
from services.progress import completed_routes_for, get_progress, upsert_progress
from store import EntityStore


def test_first_upsert_applies_defaults(store):
    progress = upsert_progress(store, "u1", "r1", {})

    assert progress.current_stop_index == 0
    assert progress.is_completed is False
    assert progress.photos_shared == []
    assert progress.started_at is not None
    assert progress.completed_at is None


def test_completion_survives_later_stop_update(store):
    upsert_progress(store, "u1", "r1", {"isCompleted": True})
    completed = get_progress(store, "u1", "r1")

    assert completed.is_completed is True
    assert completed.completed_at is not None

    updated = upsert_progress(store, "u1", "r1", {"currentStopIndex": 2})

    assert updated.current_stop_index == 2
    assert updated.is_completed is True
    assert updated.started_at == completed.started_at
    assert updated.completed_at == completed.completed_at


def test_repeated_upserts_keep_single_record(store):
    first = upsert_progress(store, "u1", "r1", {"currentStopIndex": 1})
    second = upsert_progress(store, "u1", "r1", {"currentStopIndex": 3})

    records = [p for p in store.list(UserRouteProgress) if (p.user_id, p.route_id) == ("u1", "r1")]
    assert len(records) == 1
    assert first.id == second.id == get_progress(store, "u1", "r1").id


def test_uncompleting_keeps_completed_at(store):
    done = upsert_progress(store, "u1", "r1", {"isCompleted": True})
    reverted = upsert_progress(store, "u1", "r1", {"isCompleted": False})

    assert reverted.is_completed is False
    assert reverted.completed_at == done.completed_at


def test_photos_are_replaced_in_order(store):
    photos = [
        {"id": "p1", "stopId": "stop-1", "imageUrl": "https://img/p1.jpg", "takenAt": "2024-05-01T10:00:00Z"},
        {"stopId": "stop-2", "imageUrl": "https://img/p2.jpg", "caption": "View", "takenAt": "2024-05-01T10:30:00Z"},
    ]
    progress = upsert_progress(store, "u1", "r1", {"photosShared": photos})

    assert [p.stop_id for p in progress.photos_shared] == ["stop-1", "stop-2"]
    assert progress.photos_shared[0].id == "p1"
    assert progress.photos_shared[1].id  # generated

    progress = upsert_progress(store, "u1", "r1", {"photosShared": photos[1:]})
    stored = get_progress(store, "u1", "r1")
    assert [p.caption for p in stored.photos_shared] == ["View"]
    assert progress.current_stop_index == 0


def test_invalid_patch_rejected_before_mutation(store):
    with pytest.raises(PayloadValidationError) as excinfo:
        upsert_progress(store, "u1", "r1", {"currentStopIndex": -1})

    assert "currentStopIndex" in excinfo.value.fields
    assert get_progress(store, "u1", "r1") is None


def test_photo_without_image_url_rejected(store):
    with pytest.raises(PayloadValidationError) as excinfo:
        upsert_progress(store, "u1", "r1", {"photosShared": [{"stopId": "s", "takenAt": "2024-05-01T10:00:00Z"}]})

    assert "photosShared.0.imageUrl" in excinfo.value.fields


def test_completed_routes_for_user(store, make_route):
    done = make_route(title="Done")
    started = make_route(title="Started")
    upsert_progress(store, "u1", done.id, {"isCompleted": True})
    upsert_progress(store, "u1", started.id, {"currentStopIndex": 1})
    upsert_progress(store, "u2", started.id, {"isCompleted": True})

    assert [r.id for r in completed_routes_for(store, "u1")] == [done.id]
    assert completed_routes_for(store, "nobody") == []


def test_concurrent_upserts_never_lose_updates(tmp_path):
    store = EntityStore(f"sqlite:///{tmp_path / 'progress.db'}")
    try:
        for n in range(5):
            route_id = f"route-{n}"
            barrier = threading.Barrier(2)

            def complete():
                barrier.wait()
                upsert_progress(store, "u1", route_id, {"isCompleted": True})

            def advance():
                barrier.wait()
                upsert_progress(store, "u1", route_id, {"currentStopIndex": 3})

            threads = [threading.Thread(target=complete), threading.Thread(target=advance)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            progress = get_progress(store, "u1", route_id)
            assert progress.is_completed is True
            assert progress.current_stop_index == 3

        assert len(store.list(UserRouteProgress)) == 5
    finally:
        store.dispose()


def test_in_memory_store_survives_concurrent_readers_and_writers(store):
    errors = []
    done = threading.Event()

    def read():
        try:
            while not done.is_set():
                store.list(UserRouteProgress)
                completed_routes_for(store, "u1")
        except Exception as exc:
            errors.append(exc)

    def write(offset):
        try:
            for n in range(50):
                upsert_progress(store, "u1", f"route-{offset + n}", {"currentStopIndex": 1})
        except Exception as exc:
            errors.append(exc)

    readers = [threading.Thread(target=read) for _ in range(3)]
    writers = [threading.Thread(target=write, args=(offset,)) for offset in (0, 50, 100, 150)]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join()
    done.set()
    for t in readers:
        t.join()

    assert errors == []
    assert len(store.list(UserRouteProgress)) == 200
