"""
Tests for entry validation and normalization.
"""

import pytest

from salaryqa.normalize import normalize_entry, normalize_text, to_snake_case
from salaryqa.schema import validate_entry


class TestValidateEntry:
    """Test entry validation."""

    def test_valid_full_entry(self, full_entry):
        assert validate_entry(full_entry) == []

    def test_empty_entry_is_valid(self):
        """Every field is optional at this layer."""
        assert validate_entry({}) == []

    def test_numeric_field_type(self):
        errors = validate_entry({"gross_salary": "4000"})
        assert any("gross_salary" in err and "number" in err for err in errors)

    def test_boolean_is_not_numeric(self):
        errors = validate_entry({"age": True})
        assert any("age" in err for err in errors)

    def test_integer_fields(self):
        errors = validate_entry({"age": 30.5})
        assert any("age" in err and "integer" in err for err in errors)

    def test_integral_float_accepted(self):
        assert validate_entry({"age": 30.0}) == []

    def test_string_field_type(self):
        errors = validate_entry({"job_title": 42})
        assert any("job_title" in err for err in errors)

    def test_boolean_field_type(self):
        errors = validate_entry({"multinational": "yes"})
        assert any("multinational" in err for err in errors)

    @pytest.mark.parametrize("salary", [0, -100])
    def test_gross_salary_positive(self, salary):
        errors = validate_entry({"gross_salary": salary})
        assert any("positive" in err for err in errors)

    def test_unknown_review_status(self):
        errors = validate_entry({"review_status": "MAYBE"})
        assert any("review_status" in err for err in errors)

    def test_none_means_not_provided(self):
        assert validate_entry({"gross_salary": None, "job_title": None, "multinational": None}) == []


class TestNormalize:
    """Test entry normalization."""

    def test_normalize_text(self):
        assert normalize_text("  Software Engineer ") == "software engineer"

    @pytest.mark.parametrize("key,expected", [
        ("grossSalary", "gross_salary"),
        ("workExperience", "work_experience"),
        ("ecoCheques", "eco_cheques"),
        ("country", "country"),
    ])
    def test_to_snake_case(self, key, expected):
        assert to_snake_case(key) == expected

    def test_camel_case_entry(self):
        entry = normalize_entry({
            "country": "Belgium",
            "grossSalary": 4000,
            "jobTitle": " Data Analyst ",
            "workCity": "",
            "honestyConfirmation": True,
            "createdAt": "2024-01-01T00:00:00Z",
        })

        assert entry == {
            "country": "Belgium",
            "gross_salary": 4000,
            "job_title": "Data Analyst",
            "work_city": None,
        }

    def test_snake_case_passthrough(self, full_entry):
        assert normalize_entry(full_entry) == full_entry

    def test_review_stamps_dropped(self):
        """Reviewer and review time are only set through an admin review."""
        entry = normalize_entry({"grossSalary": 4000, "reviewedBy": 1, "reviewedAt": "2024-01-01"})

        assert entry == {"gross_salary": 4000}
