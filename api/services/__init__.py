"""
API Services Layer.

Business operations for API endpoints. Every function receives the
request's EntityStore explicitly.
"""

from api.services.companies import (
    list_companies,
    get_company,
    create_company,
    update_company,
    delete_company,
)

from api.services.positions import (
    list_positions,
    get_position,
    create_position,
    update_position,
    delete_position,
)

from api.services.interviews import (
    list_interviews,
    get_interview,
    create_interview,
    update_interview,
    delete_interview,
)

from api.services.aggregation import (
    distinct_skills,
    distinct_tags,
)

from api.services.booking import BookingValidator
from api.services.integrity import IntegrityGuard

__all__ = [
    # Companies
    "list_companies",
    "get_company",
    "create_company",
    "update_company",
    "delete_company",
    # Positions
    "list_positions",
    "get_position",
    "create_position",
    "update_position",
    "delete_position",
    # Interviews
    "list_interviews",
    "get_interview",
    "create_interview",
    "update_interview",
    "delete_interview",
    # Aggregation
    "distinct_skills",
    "distinct_tags",
    # Rules
    "BookingValidator",
    "IntegrityGuard",
]
