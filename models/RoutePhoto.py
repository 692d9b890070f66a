from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from database import Base, UTCDateTime

class RoutePhoto(Base):
    __tablename__ = "route_photos"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    progress_id = Column(String(36), ForeignKey("user_route_progress.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # orden dentro de photos_shared

    id = Column(String(64), nullable=False)
    stop_id = Column(String(64), nullable=False)  # weak reference into the route's stops
    image_url = Column(String(500), nullable=False)
    caption = Column(Text, nullable=True)
    taken_at = Column(UTCDateTime, nullable=False)

    progress = relationship("UserRouteProgress", back_populates="photos_shared")
