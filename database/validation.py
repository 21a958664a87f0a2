"""
Record validation for every entity kind.

Each validator receives the complete field mapping of a record (for updates,
the stored values merged with the changes) and returns the list of violated
constraints. The store runs the same function on create and update.
"""

from datetime import datetime
from typing import Any, Callable, Mapping

from core.exceptions import Violation
from core.utils.datetime import current_year, ensure_utc
from core.utils.validators import validate_url, validate_phone, is_string_list
from database.models.companies import Company, CompanySize
from database.models.positions import Position, WorkArrangement
from database.models.interviews import Interview
from database.models.users import User, UserRole

Fields = Mapping[str, Any]
Validator = Callable[[Fields], list[Violation]]

COMPANY_NAME_MAX = 50
COMPANY_DESCRIPTION_MAX = 500
COMPANY_OVERVIEW_MAX = 2000
FOUNDED_YEAR_MIN = 1800
POSITION_LIST_MAX = 50

COMPANY_SIZES = tuple(size.value for size in CompanySize)
WORK_ARRANGEMENTS = tuple(arrangement.value for arrangement in WorkArrangement)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required(fields: Fields, name: str, message: str, errors: list[Violation]) -> bool:
    if _blank(fields.get(name)):
        errors.append(Violation(name, "required", message))
        return False
    return True


def _max_length(fields: Fields, name: str, limit: int, message: str, errors: list[Violation]) -> None:
    value = fields.get(name)
    if isinstance(value, str) and len(value) > limit:
        errors.append(Violation(name, "max_length", message))


def _url(fields: Fields, name: str, message: str, errors: list[Violation]) -> None:
    value = fields.get(name)
    if _blank(value):
        return
    valid, _ = validate_url(value)
    if not valid:
        errors.append(Violation(name, "url", message))


def _string_list(fields: Fields, name: str, errors: list[Violation], limit: int | None = None, message: str = "") -> None:
    value = fields.get(name)
    if value is None:
        return
    if not is_string_list(value):
        errors.append(Violation(name, "type", f"{name} must be a list of strings"))
        return
    if limit is not None and len(value) > limit:
        errors.append(Violation(name, "max_items", message))


def validate_company(fields: Fields) -> list[Violation]:
    errors: list[Violation] = []

    if _required(fields, "name", "Please add a name", errors):
        _max_length(fields, "name", COMPANY_NAME_MAX, "Name cannot be more than 50 characters", errors)
    _required(fields, "address", "Please add an address", errors)
    if _required(fields, "website", "Please add a website", errors):
        _url(fields, "website", "Please use a valid URL with HTTP or HTTPS", errors)
    if _required(fields, "description", "Please add a description", errors):
        _max_length(
            fields, "description", COMPANY_DESCRIPTION_MAX,
            "Description cannot be more than 500 characters", errors,
        )

    phone = fields.get("phone")
    if not _blank(phone):
        valid, error = validate_phone(phone)
        if not valid:
            errors.append(Violation("phone", "phone", error))

    _string_list(fields, "tags", errors)
    _url(fields, "logo", "Please use a valid URL for the logo image", errors)

    size = fields.get("company_size")
    if size is not None and size not in COMPANY_SIZES:
        errors.append(Violation(
            "company_size", "enum",
            f"Company size must be one of: {', '.join(COMPANY_SIZES)}",
        ))

    _max_length(fields, "overview", COMPANY_OVERVIEW_MAX, "Overview cannot be more than 2000 characters", errors)

    year = fields.get("founded_year")
    if year is not None:
        if isinstance(year, bool) or not isinstance(year, int):
            errors.append(Violation("founded_year", "type", "Founded year must be an integer"))
        elif year < FOUNDED_YEAR_MIN:
            errors.append(Violation("founded_year", "min", "Year must be later than 1800"))
        elif year > current_year():
            errors.append(Violation("founded_year", "max", "Year cannot be in the future"))

    return errors


def validate_position(fields: Fields) -> list[Violation]:
    errors: list[Violation] = []

    _required(fields, "title", "Please add a job title", errors)
    _string_list(fields, "responsibilities", errors, POSITION_LIST_MAX, "Too many responsibilities")
    _string_list(fields, "requirements", errors, POSITION_LIST_MAX, "Too many requirements")
    _string_list(fields, "skills", errors)

    openings = fields.get("opening_positions")
    if openings is None:
        errors.append(Violation("opening_positions", "required", "Please add the number of open positions"))
    elif isinstance(openings, bool) or not isinstance(openings, int):
        errors.append(Violation("opening_positions", "type", "Opening positions must be an integer"))
    elif openings < 1:
        errors.append(Violation("opening_positions", "min", "There must be at least 1 position open"))

    salary_min = fields.get("salary_min")
    salary_max = fields.get("salary_max")
    if (salary_min is None) != (salary_max is None):
        errors.append(Violation("salary", "required", "Salary range needs both a minimum and a maximum"))
    if salary_min is not None and salary_min < 0:
        errors.append(Violation("salary_min", "min", "Minimum salary cannot be negative"))
    if salary_max is not None and salary_max < 0:
        errors.append(Violation("salary_max", "min", "Maximum salary cannot be negative"))
    if salary_min is not None and salary_max is not None and salary_max < salary_min:
        errors.append(Violation(
            "salary_max", "range", "Maximum salary must be greater than or equal to minimum salary",
        ))

    arrangement = fields.get("work_arrangement")
    if arrangement is not None and arrangement not in WORK_ARRANGEMENTS:
        errors.append(Violation(
            "work_arrangement", "enum",
            f"Work arrangement must be one of: {', '.join(WORK_ARRANGEMENTS)}",
        ))

    _required(fields, "location", "Please specify the work location", errors)
    _required(fields, "company_id", "Position must belong to a company", errors)

    start = fields.get("interview_start")
    end = fields.get("interview_end")
    if start is None:
        errors.append(Violation("interview_start", "required", "Please add the start date for interview booking"))
    if end is None:
        errors.append(Violation("interview_end", "required", "Please add the end date for interview booking"))
    if isinstance(start, datetime) and isinstance(end, datetime) and ensure_utc(end) <= ensure_utc(start):
        errors.append(Violation("interview_end", "after_start", "Interview end date must be after the start date"))

    return errors


def validate_interview(fields: Fields) -> list[Violation]:
    errors: list[Violation] = []
    _required(fields, "user_id", "Please add the user", errors)
    _required(fields, "company_id", "Please add the company", errors)
    _required(fields, "position_id", "Please add the position", errors)
    if not isinstance(fields.get("interview_date"), datetime):
        errors.append(Violation("interview_date", "required", "Please add Interview Date"))
    return errors


def validate_user(fields: Fields) -> list[Violation]:
    errors: list[Violation] = []
    _required(fields, "name", "Please add a name", errors)
    _required(fields, "email", "Please add an email", errors)
    if fields.get("role") not in {role.value for role in UserRole}:
        errors.append(Violation("role", "enum", "Role must be admin or user"))
    return errors


VALIDATORS: dict[type, Validator] = {
    Company: validate_company,
    Position: validate_position,
    Interview: validate_interview,
    User: validate_user,
}


def validate(kind: type, fields: Fields) -> list[Violation]:
    """Run the validator registered for ``kind``."""
    validator = VALIDATORS.get(kind)
    if validator is None:
        return []
    return validator(fields)
