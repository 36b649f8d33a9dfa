"""
Repairs API — Validation Unit Tests
====================================

Every parser returns a ValidationResult instead of raising, so these tests
only look at `ok`, `value` and `error`.
"""

import pytest

from repairs_api.validation import (
    MAX_ID_DIGITS,
    ValidationResult,
    is_json_content_type,
    parse_json_object,
    parse_repair_id,
    validate_create,
    validate_update,
)


class TestParseRepairId:
    """Tests for turning path or body ids into integers."""

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), (5, 5), ("-3", -3)])
    def test_accepts_integers(self, raw, expected):
        """Integer strings (signed, padded) and plain ints should parse."""
        result = parse_repair_id(raw)
        assert result.ok
        assert result.value == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "abc", "12abc", "1.5", "", "   ", "1_000", None, True, 2.0, [1],
            "9" * 5000,  # past the int string conversion limit
            "١",  # ARABIC-INDIC DIGIT ONE
            "３",  # FULLWIDTH DIGIT THREE
        ],
    )
    def test_rejects_non_integers(self, raw):
        """Anything but an optional sign and ASCII digits should fail without raising."""
        result = parse_repair_id(raw)
        assert not result.ok
        assert result.value is None
        assert result.error

    def test_oversized_id_reports_length(self):
        """A digit string over the cap should say how long it was."""
        result = parse_repair_id("9" * 5000)
        assert result.error == "id of 5000 digits is too long"

    def test_digit_cap_boundary(self):
        """MAX_ID_DIGITS digits should parse; one more should not."""
        assert parse_repair_id("1" * MAX_ID_DIGITS).value == int("1" * MAX_ID_DIGITS)
        assert not parse_repair_id("1" * (MAX_ID_DIGITS + 1)).ok


class TestParseJsonObject:
    """Tests for decoding request bodies."""

    def test_object(self):
        """A JSON object should decode to a dict."""
        result = parse_json_object(b'{"title": "Oil change"}')
        assert result.ok
        assert result.value == {"title": "Oil change"}

    @pytest.mark.parametrize("raw", [b"", b"   ", b"{not json", b"[1, 2]", b'"text"', b"\xff\xfd"])
    def test_rejects_non_objects(self, raw):
        """Empty, malformed, non-UTF-8 and non-object bodies should fail."""
        assert not parse_json_object(raw).ok


class TestValidateCreate:
    """Tests for the POST /repairs body contract."""

    def test_complete_body(self, new_repair_body):
        """A body with every field should validate."""
        result = validate_create(new_repair_body)
        assert result.ok
        assert result.value.assigned_to == "Karin Blair"

    def test_missing_field_names_the_field(self, new_repair_body):
        """The error should name the missing wire field."""
        del new_repair_body["assignedTo"]
        result = validate_create(new_repair_body)
        assert not result.ok
        assert "assignedTo" in result.error

    def test_wrong_type_rejected(self, new_repair_body):
        """A non-string field value should fail."""
        new_repair_body["title"] = 12
        assert not validate_create(new_repair_body).ok

    def test_id_rejected(self, new_repair_body):
        """Clients may not choose the id."""
        new_repair_body["id"] = 3
        result = validate_create(new_repair_body)
        assert not result.ok
        assert "id" in result.error

    def test_unknown_fields_ignored(self, new_repair_body):
        """Extra keys should be dropped, not rejected."""
        new_repair_body["priority"] = "high"
        assert validate_create(new_repair_body).ok


class TestValidateUpdate:
    """Tests for the partial update body contract."""

    def test_only_supplied_fields_are_changes(self):
        """changes() should hold only the keys the client sent."""
        result = validate_update({"title": "New title", "assignedTo": "Kat Larsson"})
        assert result.ok
        assert result.value.changes() == {"title": "New title", "assigned_to": "Kat Larsson"}

    def test_explicit_null_is_a_change(self):
        """A null value should count as supplied."""
        result = validate_update({"image": None})
        assert result.value.changes() == {"image": None}

    def test_empty_body_has_no_changes(self):
        """An empty object is a valid no-op update."""
        assert validate_update({}).value.changes() == {}

    def test_id_rejected(self):
        """The id cannot be changed through an update."""
        assert not validate_update({"id": 1, "title": "x"}).ok


class TestContentType:
    """Tests for the application/json content type check."""

    @pytest.mark.parametrize(
        "header", ["application/json", "application/json; charset=utf-8", "Application/JSON"]
    )
    def test_json_accepted(self, header):
        """JSON with or without parameters, in any case, should pass."""
        assert is_json_content_type(header)

    @pytest.mark.parametrize("header", [None, "", "text/plain", "application/x-www-form-urlencoded"])
    def test_other_types_rejected(self, header):
        """Missing and non-JSON content types should fail."""
        assert not is_json_content_type(header)


def test_result_constructors():
    """success() and failure() should set ok accordingly."""
    assert ValidationResult.success(3).ok
    failed = ValidationResult.failure("nope")
    assert not failed.ok
    assert failed.error == "nope"
