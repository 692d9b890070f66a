from typing import Any, Mapping, Optional, Union

from sqlalchemy.exc import IntegrityError

from exceptions import ConflictError, StoreFailure
from models.User import User
from schemas import UserCreate
from services.validation import parse_payload
from store import EntityStore


def get_user(store: EntityStore, user_id: str) -> Optional[User]:
    return store.get(User, user_id)


def create_user(store: EntityStore, payload: Union[UserCreate, Mapping[str, Any]]) -> User:
    """Register a user; username and email must both be unused."""
    user_in = parse_payload(UserCreate, payload, "Invalid user data")

    # one registration at a time so the uniqueness check holds
    with store.lock_for("User", "register"):
        if store.get_user_by_username(user_in.username) or store.get_user_by_email(user_in.email):
            raise ConflictError("username or email already exists")
        try:
            return store.create(User, user_in.model_dump())
        except StoreFailure as exc:
            # another process registered the same username or email first
            if isinstance(exc.__cause__, IntegrityError):
                raise ConflictError("username or email already exists") from exc
            raise
