"""Unit tests for infofinder.lookup.validator and the category registry."""

import pytest

from infofinder.lookup.registry import CategoryId, definition_for, list_categories
from infofinder.lookup.validator import Invalid, Valid, ValidationFailure, validate


@pytest.mark.parametrize(
    "category,raw,expected",
    [
        (CategoryId.MOBILE, "9876543210", "9876543210"),
        (CategoryId.MOBILE, "  9876543210\n", "9876543210"),
        (CategoryId.NATIONAL_ID, "490012345678", "490012345678"),
        (CategoryId.VEHICLE, "UP15AB1234", "UP15AB1234"),
        (CategoryId.VEHICLE, "dl1c1", "dl1c1"),
        (CategoryId.FAMILY, "Sharma family of Pune", "Sharma family of Pune"),
        (CategoryId.BANK_CODE, "SBIN0000001", "SBIN0000001"),
        (CategoryId.BANK_CODE, "HDFC0A1B2C3", "HDFC0A1B2C3"),
    ],
)
def test_accepts_values_matching_grammar(category, raw, expected):
    assert validate(category, raw) == Valid(expected)


@pytest.mark.parametrize(
    "category,raw",
    [
        (CategoryId.MOBILE, "987654321"),
        (CategoryId.MOBILE, "98765432101"),
        (CategoryId.MOBILE, "98765-43210"),
        (CategoryId.NATIONAL_ID, "12345678901"),
        (CategoryId.NATIONAL_ID, "1234 5678 9012"),
        (CategoryId.VEHICLE, "U15AB1234"),
        (CategoryId.VEHICLE, "UP15ABC1234"),
        (CategoryId.VEHICLE, "UP15AB12345"),
        (CategoryId.BANK_CODE, "sbin0000001"),
        (CategoryId.BANK_CODE, "SBIN1000001"),
        (CategoryId.BANK_CODE, "SBIN000001"),
    ],
)
def test_rejects_values_outside_grammar(category, raw):
    result = validate(category, raw)
    assert isinstance(result, Invalid)
    assert result.reason is ValidationFailure.PATTERN_MISMATCH


@pytest.mark.parametrize("category", list(CategoryId))
@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_blank_input_is_always_empty(category, raw):
    result = validate(category, raw)
    assert isinstance(result, Invalid)
    assert result.reason is ValidationFailure.EMPTY
    assert result.message == "Please enter a value"


def test_mismatch_message_names_the_category():
    result = validate("bank_code", "nope")
    assert isinstance(result, Invalid)
    assert result.message == "Please enter a valid IFSC code"


def test_family_accepts_anything_non_empty():
    assert validate(CategoryId.FAMILY, "x") == Valid("x")
    assert validate(CategoryId.FAMILY, "a" * 80) == Valid("a" * 80)
    assert validate(CategoryId.FAMILY, "Sharma\nPune") == Valid("Sharma\nPune")


def test_registry_covers_every_category():
    ids = [definition.id for definition in list_categories()]
    assert ids == list(CategoryId)
    assert definition_for("national_id").query_param == "aadhar"
    assert definition_for(CategoryId.BANK_CODE).endpoint.startswith("https://ifsc.")


def test_unknown_category_fails_fast():
    with pytest.raises(KeyError):
        definition_for("passport")
    with pytest.raises(KeyError):
        validate("passport", "X1234567")
