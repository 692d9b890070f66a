from sqlalchemy import Column, Integer, String, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base, UTCDateTime, new_id, utcnow

class UserRouteProgress(Base):
    __tablename__ = "user_route_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "route_id", name="uq_user_route_progress"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    route_id = Column(String(36), nullable=False, index=True)
    current_stop_index = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    started_at = Column(UTCDateTime, default=utcnow, nullable=False)
    completed_at = Column(UTCDateTime, nullable=True)

    photos_shared = relationship(
        "RoutePhoto",
        back_populates="progress",
        cascade="all, delete-orphan",
        order_by="RoutePhoto.position",
        lazy="selectin",
    )
