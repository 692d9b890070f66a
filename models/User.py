from sqlalchemy import Column, String, Text
from database import Base, UTCDateTime, new_id, utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(150), nullable=False)
    profile_image = Column(String(500), nullable=True)  # URL de imagen de perfil
    location = Column(Text, nullable=True)  # ciudad/región del usuario
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
