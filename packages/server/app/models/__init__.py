# SQLModel definitions: imported here to ensure metadata is populated for Alembic.
from .base import IdMixin, TimestampMixin  # noqa: F401
from .project import Project  # noqa: F401
from .user import User  # noqa: F401
from .membership import ProjectMember  # noqa: F401
