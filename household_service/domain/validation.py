from __future__ import annotations

from household_service.errors import FieldError

# Column sizes of the households / household_user_lookups tables.
NAME_MAX_LENGTH = 255
ADDRESS_LINE_MAX_LENGTH = 255
CITY_MAX_LENGTH = 128
STATE_MAX_LENGTH = 64
USER_ID_MAX_LENGTH = 64
# Largest value of a 32-bit INTEGER column.
MAX_INTEGER = 2**31 - 1


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_length(
    errors: list[FieldError], field: str, value: str | None, label: str, max_length: int
) -> None:
    if value is not None and len(value) > max_length:
        errors.append(
            FieldError(field, f"{label} must be at most {max_length} characters")
        )


def _require(
    errors: list[FieldError], field: str, value: str | None, label: str, max_length: int
) -> None:
    if _is_blank(value):
        errors.append(FieldError(field, f"{label} is required"))
    else:
        _check_length(errors, field, value, label, max_length)


def validate_household_fields(
    *,
    name: str | None,
    owner_id: str | None,
    first_address_line: str | None,
    city: str | None,
    state: str | None,
    zip_code: int | None,
    second_address_line: str | None = None,
) -> list[FieldError]:
    """Check the structural fields of a new household.

    Every field is checked; the returned list holds all violations (empty when
    the input is valid). The second address line is free-form and optional.
    """
    errors: list[FieldError] = []
    _require(errors, "name", name, "Household name", NAME_MAX_LENGTH)
    _require(errors, "owner_id", owner_id, "Owner id", USER_ID_MAX_LENGTH)
    _require(
        errors,
        "first_address_line",
        first_address_line,
        "First address line",
        ADDRESS_LINE_MAX_LENGTH,
    )
    _check_length(
        errors,
        "second_address_line",
        second_address_line,
        "Second address line",
        ADDRESS_LINE_MAX_LENGTH,
    )
    _require(errors, "city", city, "City", CITY_MAX_LENGTH)
    _require(errors, "state", state, "State", STATE_MAX_LENGTH)

    if zip_code is None:
        errors.append(FieldError("zip_code", "Zip code is required"))
    elif zip_code < 0:
        errors.append(FieldError("zip_code", "Zip code must be a non-negative integer"))
    elif zip_code > MAX_INTEGER:
        errors.append(FieldError("zip_code", f"Zip code must be at most {MAX_INTEGER}"))

    return errors


def validate_user_and_household(
    *, user_id: str | None, household_id: int | None
) -> list[FieldError]:
    """Check that both identifiers of a membership request are present and in range."""
    errors: list[FieldError] = []
    _require(errors, "user_id", user_id, "User id", USER_ID_MAX_LENGTH)
    if household_id is None:
        errors.append(FieldError("household_id", "Household id is required"))
    elif household_id > MAX_INTEGER:
        errors.append(
            FieldError("household_id", f"Household id must be at most {MAX_INTEGER}")
        )
    return errors
