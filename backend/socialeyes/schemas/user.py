"""Pydantic schemas for Users."""
from pydantic import Field

from socialeyes.schemas.base import CamelModel


class UserCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=256)
    username: str = Field(min_length=4, max_length=30)


class UserOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    username: str
