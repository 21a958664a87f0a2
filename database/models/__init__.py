"""Model registry. Importing this package registers every table on ``Base.metadata``."""

from database.models.users import User, UserRole
from database.models.companies import Company, CompanySize
from database.models.positions import Position, WorkArrangement
from database.models.interviews import Interview

__all__ = [
    "User",
    "UserRole",
    "Company",
    "CompanySize",
    "Position",
    "WorkArrangement",
    "Interview",
]
