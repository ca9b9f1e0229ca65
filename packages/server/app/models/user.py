"""User model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import IdMixin, TimestampMixin


class User(IdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    code: str = Field(unique=True, nullable=False, index=True)
    name: str = Field(nullable=False, index=True)
    role: str = Field(nullable=False)  # role of record, free text
    city: Optional[str] = None
    email: Optional[str] = Field(default=None, unique=True, index=True)
    phone: Optional[str] = Field(default=None, unique=True, index=True)
    is_super_admin: bool = Field(default=False, nullable=False)
