"""Project model."""

from sqlmodel import Field, SQLModel

from .base import IdMixin, TimestampMixin


class Project(IdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "projects"

    code: str = Field(unique=True, nullable=False, index=True)
    name: str = Field(nullable=False, index=True)
    city: str = Field(nullable=False)
    stage: str = Field(nullable=False)
    status: str = Field(default="Ongoing", nullable=False)  # Ongoing | Completed | On Hold
    health: str = Field(default="Good", nullable=False)  # Good | At Risk | Delayed
