import re

import pytest

from archive.errors import ErrorKind, ValidationError
from archive.services.validators import (
    UNSET,
    parse_id,
    validate_attribute,
    validate_email,
    validate_id_list,
    validate_int,
    validate_name,
    validate_resource,
    validate_text,
)


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "", 0, -3, True, None, "01"])
def test_parse_id_rejects_non_positive_integers(raw):
    with pytest.raises(ValidationError) as exc:
        parse_id(raw, "Skill")
    assert exc.value.message == "Skill ID must be a positive integer"
    assert exc.value.kind is ErrorKind.VALIDATION


def test_parse_id_accepts_digits_and_ints():
    assert parse_id("42", "Skill") == 42
    assert parse_id(7, "Skill") == 7


def test_name_is_trimmed_and_bounded():
    assert validate_name("  Fireball ", "Skill name", max_length=100) == "Fireball"
    with pytest.raises(ValidationError, match="Skill name cannot be empty"):
        validate_name("   ", "Skill name", max_length=100)
    with pytest.raises(ValidationError, match="cannot exceed 5 characters"):
        validate_name("abcdef", "Tag name", max_length=5)
    with pytest.raises(ValidationError, match="is required"):
        validate_name(UNSET, "Skill name", max_length=100, required=True)
    assert validate_name(UNSET, "Skill name", max_length=100) is UNSET


def test_name_pattern_and_min_length():
    pattern = re.compile(r"^[a-z]+$")
    with pytest.raises(ValidationError, match="Tag name has an invalid format"):
        validate_name("ABC", "Tag name", max_length=10, pattern=pattern)
    with pytest.raises(ValidationError, match="must be between 2 and 50 characters"):
        validate_name("A", "User name", min_length=2, max_length=50)
    with pytest.raises(ValidationError, match="must be between 2 and 50 characters"):
        validate_name("A" * 51, "User name", min_length=2, max_length=50)


def test_text_empty_becomes_none():
    assert validate_text("", "Description") is None
    assert validate_text(None, "Description") is None
    assert validate_text(" hi ", "Description") == "hi"
    with pytest.raises(ValidationError):
        validate_text(5, "Description")


def test_int_rejects_booleans_and_out_of_range():
    assert validate_int(0, "attack", minimum=0) == 0
    with pytest.raises(ValidationError, match="attack must be a non-negative integer"):
        validate_int(-1, "attack", minimum=0)
    with pytest.raises(ValidationError):
        validate_int(True, "attack", minimum=0)
    with pytest.raises(ValidationError):
        validate_int("3", "attack", minimum=0)


def test_attribute_and_resource_bounds():
    assert validate_attribute(1, "strength") == 1
    assert validate_attribute(20, "strength") == 20
    with pytest.raises(ValidationError, match="between 1 and 20"):
        validate_attribute(21, "Character strength")
    with pytest.raises(ValidationError, match="at least 1"):
        validate_resource(0, "Character health")


def test_email_is_lowercased():
    assert validate_email("  Bob@Example.COM ") == "bob@example.com"
    with pytest.raises(ValidationError, match="valid email"):
        validate_email("not-an-email")


def test_id_list_deduplicates_and_checks_members():
    assert validate_id_list([3, 1, 3, 2, 1], "Tag") == [3, 1, 2]
    with pytest.raises(ValidationError, match="Tag IDs must be an array"):
        validate_id_list("1,2", "Tag")
    with pytest.raises(ValidationError, match="Tag ID 0 must be a positive integer"):
        validate_id_list([1, 0], "Tag")
