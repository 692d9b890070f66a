from sqlalchemy import Column, String, UniqueConstraint
from database import Base, UTCDateTime, new_id, utcnow

class SavedRoute(Base):
    __tablename__ = "saved_routes"
    __table_args__ = (
        UniqueConstraint("user_id", "route_id", name="uq_saved_route"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    route_id = Column(String(36), nullable=False, index=True)  # weak reference, route may be gone
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
