from sqlalchemy import Column, Integer, String, Text, Float, Boolean
from sqlalchemy.orm import relationship
from database import Base, UTCDateTime, new_id, utcnow

class Route(Base):
    __tablename__ = "routes"

    id = Column(String(36), primary_key=True, default=new_id)

    # Route info
    title = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    long_description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, index=True)  # food-drink, culture-art, hidden-gems, nightlife
    hero_image = Column(String(500), nullable=False)

    # Metadata de la ruta
    duration = Column(Integer, nullable=False)  # minutes
    distance = Column(Float, nullable=False)  # km
    difficulty = Column(String(20), nullable=False, default="easy")  # easy, moderate, challenging

    # Engagement metrics
    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    # Estado
    is_published = Column(Boolean, default=False, nullable=False, index=True)
    created_by = Column(String(36), nullable=True)  # weak reference to users.id
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)

    stops = relationship(
        "RouteStop",
        back_populates="route",
        cascade="all, delete-orphan",
        order_by="RouteStop.order",
        lazy="selectin",
    )
