"""User ORM model."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from socialeyes.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(256), nullable=False, unique=True)
    username = Column(String(30), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
