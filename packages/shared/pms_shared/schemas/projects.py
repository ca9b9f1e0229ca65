from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class ProjectCreate(CamelModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=200)
    city: str = Field(max_length=100)
    stage: str = Field(max_length=100)
    status: Optional[str] = None
    health: Optional[str] = None


class ProjectRead(CamelModel):
    id: str
    code: str
    name: str
    city: str
    stage: str
    status: str
    health: str
    created_at: datetime
    updated_at: datetime
