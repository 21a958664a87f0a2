"""
Tests for request payload schemas.

Tests:
- Salary flattening on create and update
- Optional booking fields
"""

from api.schemas.interviews import InterviewCreate
from api.schemas.positions import PositionCreate, PositionUpdate


class TestPositionSalary:
    """Test how the salary object maps onto its columns."""

    def test_update_with_range(self):
        fields = PositionUpdate(salary={"min": 1000, "max": 2000}).to_fields()
        assert fields == {"salary_min": 1000, "salary_max": 2000}

    def test_update_with_null_clears_range(self):
        fields = PositionUpdate(salary=None).to_fields()
        assert fields == {"salary_min": None, "salary_max": None}

    def test_update_without_salary_leaves_range(self):
        fields = PositionUpdate(title="Staff Engineer").to_fields()
        assert fields == {"title": "Staff Engineer"}

    def test_create_without_salary(self, window_start, window_end):
        fields = PositionCreate(
            title="Engineer",
            opening_positions=1,
            location="Remote",
            interview_start=window_start,
            interview_end=window_end,
        ).to_fields()

        assert "salary_min" not in fields
        assert "salary_max" not in fields


class TestInterviewCreate:
    """Test booking payloads."""

    def test_position_and_date_optional(self):
        fields = InterviewCreate().to_fields()
        assert fields["position_id"] is None
        assert fields["interview_date"] is None
