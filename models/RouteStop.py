from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey
from sqlalchemy.orm import relationship
from database import Base

class RouteStop(Base):
    __tablename__ = "route_stops"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    route_id = Column(String(36), ForeignKey("routes.id", ondelete="CASCADE"), nullable=False, index=True)

    # Stop info
    id = Column(String(64), nullable=False)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(500), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    order = Column("stop_order", Integer, nullable=False)  # 1-based position in the route
    estimated_time_minutes = Column(Integer, nullable=False)

    route = relationship("Route", back_populates="stops")
