"""
Tests for per-entity record validation.

Tests:
- Company required fields, lengths, URLs, enums and founded year
- Position window and salary invariants
- Interview and user required fields
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.utils.datetime import current_year
from database.models import Company, Interview, Position, User
from database.validation import (
    validate,
    validate_company,
    validate_interview,
    validate_position,
    validate_user,
)

START = datetime(2030, 5, 1, 9, 0, tzinfo=timezone.utc)
END = START + timedelta(days=3)


def constraints(violations):
    return {(v.field, v.constraint) for v in violations}


def valid_company(**overrides):
    fields = {
        "name": "Acme Corp",
        "address": "1 Main Street",
        "website": "https://acme.example.com",
        "description": "Makes everything",
        "tags": ["tools"],
    }
    fields.update(overrides)
    return fields


def valid_position(**overrides):
    fields = {
        "title": "Backend Engineer",
        "opening_positions": 1,
        "location": "Remote",
        "company_id": "c" * 32,
        "interview_start": START,
        "interview_end": END,
    }
    fields.update(overrides)
    return fields


class TestCompanyValidation:
    """Test company constraints."""

    def test_valid_company_has_no_violations(self):
        assert validate_company(valid_company()) == []

    def test_missing_required_fields(self):
        violations = validate_company({})
        messages = {v.message for v in violations}

        assert "Please add a name" in messages
        assert "Please add an address" in messages
        assert "Please add a website" in messages
        assert "Please add a description" in messages

    def test_blank_name_is_missing(self):
        assert ("name", "required") in constraints(validate_company(valid_company(name="   ")))

    def test_name_length_limit(self):
        assert validate_company(valid_company(name="x" * 50)) == []

        violations = validate_company(valid_company(name="x" * 51))
        assert [v.message for v in violations] == ["Name cannot be more than 50 characters"]

    def test_description_length_limit(self):
        violations = validate_company(valid_company(description="x" * 501))
        assert ("description", "max_length") in constraints(violations)

    def test_overview_length_limit(self):
        assert validate_company(valid_company(overview="x" * 2000)) == []
        assert ("overview", "max_length") in constraints(
            validate_company(valid_company(overview="x" * 2001))
        )

    @pytest.mark.parametrize("website", [
        "acme.example.com",
        "ftp://acme.example.com",
        "https://",
        "not a url",
    ])
    def test_website_must_be_http_url(self, website):
        violations = validate_company(valid_company(website=website))
        assert [v.message for v in violations] == ["Please use a valid URL with HTTP or HTTPS"]

    def test_logo_must_be_url_when_given(self):
        assert validate_company(valid_company(logo="https://cdn.example.com/logo.png")) == []
        assert ("logo", "url") in constraints(validate_company(valid_company(logo="logo.png")))

    def test_company_size_enum(self):
        assert validate_company(valid_company(company_size="1000+ employees")) == []
        assert ("company_size", "enum") in constraints(
            validate_company(valid_company(company_size="huge"))
        )

    def test_founded_year_bounds(self):
        assert validate_company(valid_company(founded_year=1800)) == []
        assert validate_company(valid_company(founded_year=current_year())) == []

        too_old = validate_company(valid_company(founded_year=1799))
        assert [v.message for v in too_old] == ["Year must be later than 1800"]

        future = validate_company(valid_company(founded_year=current_year() + 1))
        assert [v.message for v in future] == ["Year cannot be in the future"]

    def test_tags_must_be_strings(self):
        assert ("tags", "type") in constraints(validate_company(valid_company(tags=["a", 1])))

    def test_phone_digits(self):
        assert validate_company(valid_company(phone="+1 (555) 010-2000")) == []
        assert ("phone", "phone") in constraints(validate_company(valid_company(phone="12")))


class TestPositionValidation:
    """Test position constraints, including the window and salary invariants."""

    def test_valid_position_has_no_violations(self):
        assert validate_position(valid_position()) == []

    def test_window_end_must_follow_start(self):
        violations = validate_position(valid_position(interview_end=START))
        assert [v.message for v in violations] == ["Interview end date must be after the start date"]

        violations = validate_position(valid_position(interview_end=START - timedelta(hours=1)))
        assert ("interview_end", "after_start") in constraints(violations)

    def test_window_compares_naive_as_utc(self):
        naive_end = (START + timedelta(hours=1)).replace(tzinfo=None)
        assert validate_position(valid_position(interview_end=naive_end)) == []

    def test_window_bounds_required(self):
        violations = validate_position(valid_position(interview_start=None, interview_end=None))
        assert {("interview_start", "required"), ("interview_end", "required")} <= constraints(violations)

    def test_salary_max_not_below_min(self):
        assert validate_position(valid_position(salary_min=100, salary_max=100)) == []

        violations = validate_position(valid_position(salary_min=100, salary_max=99))
        assert ("salary_max", "range") in constraints(violations)

    def test_salary_bounds_non_negative(self):
        violations = validate_position(valid_position(salary_min=-1, salary_max=10))
        assert ("salary_min", "min") in constraints(violations)

    def test_salary_needs_both_bounds(self):
        violations = validate_position(valid_position(salary_min=100))
        assert ("salary", "required") in constraints(violations)

    def test_opening_positions_at_least_one(self):
        violations = validate_position(valid_position(opening_positions=0))
        assert [v.message for v in violations] == ["There must be at least 1 position open"]

    def test_list_limits(self):
        items = [f"item {i}" for i in range(51)]
        violations = validate_position(valid_position(responsibilities=items, requirements=items))
        messages = {v.message for v in violations}
        assert messages == {"Too many responsibilities", "Too many requirements"}

    def test_work_arrangement_enum(self):
        assert validate_position(valid_position(work_arrangement="Remote")) == []
        assert ("work_arrangement", "enum") in constraints(
            validate_position(valid_position(work_arrangement="Moon"))
        )

    def test_required_fields(self):
        violations = validate_position({})
        fields = {v.field for v in violations}
        assert {"title", "opening_positions", "location", "company_id"} <= fields


class TestOtherKinds:
    """Test interview and user constraints and dispatch."""

    def test_interview_requires_references_and_date(self):
        violations = validate_interview({})
        assert {v.field for v in violations} == {"user_id", "company_id", "position_id", "interview_date"}

    def test_user_role_enum(self):
        assert validate_user({"name": "A", "email": "a@example.com", "role": "admin"}) == []
        assert ("role", "enum") in constraints(
            validate_user({"name": "A", "email": "a@example.com", "role": "root"})
        )

    def test_dispatch_by_kind(self):
        assert validate(Company, valid_company()) == []
        assert validate(Position, valid_position()) == []
        assert validate(Interview, {}) != []
        assert validate(User, {}) != []

    def test_unknown_kind_has_no_rules(self):
        assert validate(dict, {}) == []
