from fastapi import Request

from store import EntityStore


def get_store(request: Request) -> EntityStore:
    """The store built by create_app; one per process."""
    return request.app.state.store
