"""User model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, func
from signup_api.database import Base


class User(Base):
    """Represents a registered user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
