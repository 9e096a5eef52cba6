from household_service.domain.validation import (
    ADDRESS_LINE_MAX_LENGTH,
    CITY_MAX_LENGTH,
    MAX_INTEGER,
    NAME_MAX_LENGTH,
    STATE_MAX_LENGTH,
    USER_ID_MAX_LENGTH,
    validate_household_fields,
    validate_user_and_household,
)


def valid_household(**overrides):
    fields = {
        "name": "Smiths",
        "owner_id": "u1",
        "first_address_line": "123 Main St",
        "city": "Ames",
        "state": "IA",
        "zip_code": 50010,
    }
    fields.update(overrides)
    return fields


def test_valid_household_has_no_errors():
    assert validate_household_fields(**valid_household()) == []


def test_zero_zip_code_is_valid():
    assert validate_household_fields(**valid_household(zip_code=0)) == []


def test_whitespace_only_fields_are_missing():
    errors = validate_household_fields(**valid_household(city="  ", state="\t"))
    assert [e.field for e in errors] == ["city", "state"]


def test_negative_zip_code_message():
    errors = validate_household_fields(**valid_household(zip_code=-1))
    assert len(errors) == 1
    assert errors[0].field == "zip_code"
    assert "non-negative" in errors[0].message


def test_membership_ids_both_missing():
    errors = validate_user_and_household(user_id=None, household_id=None)
    assert [e.field for e in errors] == ["user_id", "household_id"]


def test_membership_ids_present():
    assert validate_user_and_household(user_id="u1", household_id=0) == []


def test_household_fields_at_column_limits_are_valid():
    fields = valid_household(
        name="n" * NAME_MAX_LENGTH,
        owner_id="o" * USER_ID_MAX_LENGTH,
        first_address_line="a" * ADDRESS_LINE_MAX_LENGTH,
        second_address_line="b" * ADDRESS_LINE_MAX_LENGTH,
        city="c" * CITY_MAX_LENGTH,
        state="s" * STATE_MAX_LENGTH,
        zip_code=MAX_INTEGER,
    )
    assert validate_household_fields(**fields) == []


def test_household_fields_over_column_limits():
    fields = valid_household(
        name="n" * (NAME_MAX_LENGTH + 1),
        owner_id="o" * (USER_ID_MAX_LENGTH + 1),
        first_address_line="a" * (ADDRESS_LINE_MAX_LENGTH + 1),
        second_address_line="b" * (ADDRESS_LINE_MAX_LENGTH + 1),
        city="c" * (CITY_MAX_LENGTH + 1),
        state="s" * (STATE_MAX_LENGTH + 1),
    )
    errors = validate_household_fields(**fields)
    assert [e.field for e in errors] == [
        "name",
        "owner_id",
        "first_address_line",
        "second_address_line",
        "city",
        "state",
    ]
    assert errors[0].message == f"Household name must be at most {NAME_MAX_LENGTH} characters"


def test_zip_code_above_integer_range():
    errors = validate_household_fields(**valid_household(zip_code=MAX_INTEGER + 1))
    assert len(errors) == 1
    assert errors[0].field == "zip_code"
    assert errors[0].message == "Zip code must be at most 2147483647"


def test_membership_ids_out_of_range():
    errors = validate_user_and_household(
        user_id="u" * (USER_ID_MAX_LENGTH + 1), household_id=MAX_INTEGER + 1
    )
    assert [e.field for e in errors] == ["user_id", "household_id"]
    assert "at most" in errors[0].message
    assert "at most" in errors[1].message
