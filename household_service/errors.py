"""Custom domain exceptions for the application."""

from dataclasses import dataclass

# Stable, machine-readable error codes for API consumers.
VALIDATION_ERROR = "VALIDATION_ERROR"
HOUSEHOLD_NOT_FOUND = "HOUSEHOLD_NOT_FOUND"
USER_NOT_FOUND = "USER_NOT_FOUND"
USER_ALREADY_IN_HOUSEHOLD = "USER_ALREADY_IN_HOUSEHOLD"
HOUSEHOLD_HAS_MEMBERS = "HOUSEHOLD_HAS_MEMBERS"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
DIRECTORY_UNAVAILABLE = "DIRECTORY_UNAVAILABLE"


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single rejected input field."""

    field: str
    message: str


class DomainError(Exception):
    """Base exception for domain/business logic errors.

    Carries a human-readable message, a title, a machine-readable code and the
    reference path of the resource the failing operation was addressing.
    """

    code: str = "DOMAIN_ERROR"
    title: str = "Request failed."

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class HouseholdNotFoundError(NotFoundError):
    """Raised when a household, or a user's membership in one, does not exist."""

    code = HOUSEHOLD_NOT_FOUND
    title = "Household not found."


class UserNotFoundError(NotFoundError):
    """Raised when the user directory has no record of a user."""

    code = USER_NOT_FOUND
    title = "User not found."


class DuplicateResourceError(DomainError):
    """Raised when attempting to create a resource that would violate a uniqueness constraint."""

    code = DUPLICATE_RESOURCE
    title = "Duplicate resource."


class UserAlreadyInHouseholdError(DuplicateResourceError):
    """Raised when a user who already belongs to a household is added to one."""

    code = USER_ALREADY_IN_HOUSEHOLD
    title = "User already in household."


class HouseholdHasMembersError(DomainError):
    """Raised when deleting a household that still has members."""

    code = HOUSEHOLD_HAS_MEMBERS
    title = "Household has members."


class DirectoryUnavailableError(DomainError):
    """Raised when the user directory cannot be reached or fails to answer.

    Transient: callers may retry the whole operation.
    """

    code = DIRECTORY_UNAVAILABLE
    title = "User directory unavailable."


class DomainValidationError(DomainError):
    """Raised when request fields are missing or malformed.

    Holds every field violation found, never just the first one.
    """

    code = VALIDATION_ERROR
    title = "Illegal request format."

    def __init__(
        self,
        message: str,
        errors: list[FieldError],
        path: str | None = None,
    ):
        super().__init__(message, path)
        self.errors = errors
