from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Ordered role slots available on every project
DEFAULT_ROLE_CATALOG: tuple[str, ...] = (
    "Customer",
    "PMC",
    "Architect",
    "Designer",
    "Contractor",
    "Legal/Liaisoning",
    "Ava-PMT",
    "DC (Contractor)",
    "DC (PMC)",
    "Inspector (PMC)",
    "HOD (PMC)",
    "Engineer (Contractor)",
)


class ProjectStatus(str, Enum):
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class ProjectHealth(str, Enum):
    GOOD = "Good"
    AT_RISK = "At Risk"
    DELAYED = "Delayed"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FOREIGN_KEY_ERROR = "FOREIGN_KEY_ERROR"
    NOT_FOUND = "NOT_FOUND"
    STORAGE_ERROR = "STORAGE_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"


class CamelModel(BaseModel):
    """Base for wire models: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(BaseModel):
    ok: bool = True


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str
    status: int


class ErrorResponse(BaseModel):
    error: ErrorBody
    detail: Optional[object] = None
