# schemas.py (Pydantic v2)
from enum import Enum
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class CamelModel(BaseModel):
    """JSON uses camelCase (longDescription, currentStopIndex, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


# ---------- Enumerations ----------
class Category(str, Enum):
    FOOD_DRINK = "food-drink"
    CULTURE_ART = "culture-art"
    HIDDEN_GEMS = "hidden-gems"
    NIGHTLIFE = "nightlife"

class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    CHALLENGING = "challenging"

class Bucket(str, Enum):
    """Coarse range used to filter by duration or distance."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


# ---------- Users ----------
class UserBase(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    name: str = Field(min_length=1, max_length=150)
    profile_image: Optional[str] = None
    location: Optional[str] = None

class UserCreate(UserBase):
    pass

class UserRead(UserBase):
    id: str
    created_at: datetime


# ---------- Route Stops ----------
class RouteStopBase(CamelModel):
    name: str = Field(min_length=1, max_length=150)
    description: str
    image: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    order: int = Field(ge=1)  # 1-based position in the route
    estimated_time_minutes: int = Field(ge=0)

class RouteStopCreate(RouteStopBase):
    id: Optional[str] = Field(default=None, min_length=1, max_length=64)  # generated when omitted

class RouteStopRead(RouteStopBase):
    id: str


def _check_stop_sequence(stops: Optional[List[RouteStopCreate]]):
    if stops is None:
        return stops
    orders = [stop.order for stop in stops]
    if any(later <= earlier for earlier, later in zip(orders, orders[1:])):
        raise ValueError("stop order values must be unique and increasing")
    ids = [stop.id for stop in stops if stop.id is not None]
    if len(ids) != len(set(ids)):
        raise ValueError("stop ids must be unique within a route")
    return stops


# ---------- Routes ----------
class RouteBase(CamelModel):
    title: str = Field(min_length=1, max_length=150)
    description: str
    long_description: Optional[str] = None
    category: Category
    hero_image: str
    duration: int = Field(ge=0)  # minutes
    distance: float = Field(ge=0)  # km
    difficulty: Difficulty = Difficulty.EASY
    is_published: bool = False
    created_by: Optional[str] = None

class RouteCreate(RouteBase):
    stops: List[RouteStopCreate]

    @field_validator("stops")
    @classmethod
    def check_stop_sequence(cls, stops):
        return _check_stop_sequence(stops)

class RouteUpdate(CamelModel):
    """Partial update for routes"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    long_description: Optional[str] = None
    category: Optional[Category] = None
    hero_image: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    distance: Optional[float] = Field(default=None, ge=0)
    difficulty: Optional[Difficulty] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    review_count: Optional[int] = Field(default=None, ge=0)
    is_published: Optional[bool] = None
    stops: Optional[List[RouteStopCreate]] = None

    @field_validator(
        "title", "description", "category", "hero_image", "duration", "distance",
        "difficulty", "rating", "review_count", "is_published", "stops",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)

    @field_validator("stops")
    @classmethod
    def check_stop_sequence(cls, stops):
        return _check_stop_sequence(stops)

class RouteRead(RouteBase):
    id: str
    rating: float = Field(ge=0, le=5)
    review_count: int = Field(ge=0)
    created_at: datetime

    # Include stops
    stops: List[RouteStopRead] = []


# ---------- Route Progress ----------
class RoutePhotoBase(CamelModel):
    stop_id: str = Field(min_length=1, max_length=64)
    image_url: str = Field(min_length=1, max_length=500)
    caption: Optional[str] = None
    taken_at: datetime  # ISO timestamp

class RoutePhotoCreate(RoutePhotoBase):
    id: Optional[str] = Field(default=None, min_length=1, max_length=64)

class RoutePhotoRead(RoutePhotoBase):
    id: str

class ProgressUpsert(CamelModel):
    """Fields omitted from the payload keep their stored value."""
    current_stop_index: Optional[int] = Field(default=None, ge=0)
    is_completed: Optional[bool] = None
    photos_shared: Optional[List[RoutePhotoCreate]] = None

    @field_validator("current_stop_index", "is_completed", "photos_shared", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)

class ProgressRead(CamelModel):
    id: str
    user_id: str
    route_id: str
    current_stop_index: int
    is_completed: bool
    photos_shared: List[RoutePhotoRead] = []
    started_at: datetime
    completed_at: Optional[datetime] = None


# ---------- Saved Routes ----------
class SavedRouteCreate(CamelModel):
    route_id: str = Field(min_length=1)

class SavedRouteRead(CamelModel):
    id: str
    user_id: str
    route_id: str
    created_at: datetime


# ---------- Errors ----------
class FieldError(BaseModel):
    field: str
    message: str
    type: str

class ValidationErrorResponse(BaseModel):
    detail: str
    errors: List[FieldError]
