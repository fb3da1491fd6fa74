import pytest

from profiles.domain.errors import ErrorKind, InvalidArgument, InvalidField
from profiles.domain.validation import validate_profile, validate_profile_id


def test_valid_fields_are_trimmed():
    fields = validate_profile("  Ada  ", " ada@example.com ", 36)
    assert fields.name == "Ada"
    assert fields.email == "ada@example.com"
    assert fields.age == 36


@pytest.mark.parametrize(
    "name, email, age, field",
    [
        (None, "a@b.com", 20, "name"),
        ("", "a@b.com", 20, "name"),
        ("   ", "a@b.com", 20, "name"),
        ("A" * 101, "a@b.com", 20, "name"),
        ("A", None, 20, "email"),
        ("A", "  ", 20, "email"),
        ("A", "ab.com", 20, "email"),
        ("A", "a@bcom", 20, "email"),
        ("A", "a@b.com", None, "age"),
        ("A", "a@b.com", -1, "age"),
        ("A", "a@b.com", 151, "age"),
        ("A", "a@b.com", "20", "age"),
        ("A", "a@b.com", True, "age"),
    ],
)
def test_invalid_fields(name, email, age, field):
    with pytest.raises(InvalidField) as exc_info:
        validate_profile(name, email, age)
    assert exc_info.value.field == field
    assert exc_info.value.kind is ErrorKind.INVALID_FIELD
    assert exc_info.value.message


def test_boundaries_are_inclusive():
    assert validate_profile("A" * 100, "a@b.c", 0).age == 0
    assert validate_profile("A", "a@b.c", 150).age == 150


def test_first_failure_wins():
    # name is checked before email and age
    with pytest.raises(InvalidField) as exc_info:
        validate_profile("", "not-an-email", 999)
    assert exc_info.value.field == "name"


def test_name_length_counts_trimmed_value():
    assert validate_profile("  " + "A" * 100 + "  ", "a@b.com", 1).name == "A" * 100


def test_age_out_of_range_message():
    with pytest.raises(InvalidField, match="between 0 and 150"):
        validate_profile("A", "a@b.com", 200)


@pytest.mark.parametrize("bad_id", [None, 0, -5, "1", 1.0, False])
def test_invalid_profile_id(bad_id):
    with pytest.raises(InvalidArgument):
        validate_profile_id(bad_id)


def test_valid_profile_id():
    assert validate_profile_id(7) == 7
