"""SQLModel table models - import here so metadata is populated."""

from lab_system.models.laboratory import Laboratory  # noqa: F401
from lab_system.models.profiles import Admin, Teacher, TechnicalStaff  # noqa: F401
from lab_system.models.user import User, UserType  # noqa: F401
