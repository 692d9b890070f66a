from fastapi import APIRouter, Depends, status

from dependencies import get_store
from exceptions import NotFoundError
from schemas import UserCreate, UserRead, ValidationErrorResponse
from services import users as user_service
from store import EntityStore

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}, 409: {"description": "Username or email taken"}},
)
def create_user(payload: UserCreate, store: EntityStore = Depends(get_store)):
    return user_service.create_user(store, payload)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, store: EntityStore = Depends(get_store)):
    """
    Get a user by ID.
    """
    user = user_service.get_user(store, user_id)
    if not user:
        raise NotFoundError("User")
    return user
