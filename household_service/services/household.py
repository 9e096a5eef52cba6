"""Household and membership business logic.

Every operation that touches memberships first confirms, through the user
directory, that the user exists. A user belongs to at most one household at a
time; the unique index on ``household_user_lookups.user_id`` is the final
authority on that rule, the checks below only produce friendlier errors.

Services own the transaction: repositories flush, services commit on success.
A failed operation never commits, so no partial write survives it.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import household_service.repositories.household as household_repo
import household_service.repositories.household_user_lookup as lookup_repo
from household_service.clients.user_directory import UserDirectoryClient
from household_service.db.models.household import Household as HouseholdModel
from household_service.db.models.household_user_lookup import (
    HouseholdUserLookup as LookupModel,
)
from household_service.domain.validation import (
    validate_household_fields,
    validate_user_and_household,
)
from household_service.errors import (
    DomainError,
    DomainValidationError,
    DuplicateResourceError,
    HouseholdHasMembersError,
    HouseholdNotFoundError,
    UserAlreadyInHouseholdError,
    UserNotFoundError,
)
from household_service.schemas.user import User

logger = logging.getLogger(__name__)

HOUSEHOLDS_PATH = "/households"
MEMBERS_PATH = "/households/users"


def _logged(error: DomainError) -> DomainError:
    logger.warning("%s (%s)", error.message, error.path)
    return error


def _require_user(
    directory: UserDirectoryClient, user_id: str, message: str, path: str
) -> User:
    user = directory.get_user(user_id)
    if user is None:
        raise _logged(UserNotFoundError(message, path))
    return user


def _require_household(
    db: Session, household_id: int, message: str, path: str
) -> HouseholdModel:
    household = household_repo.get_household_by_id(db, household_id)
    if household is None:
        raise _logged(HouseholdNotFoundError(message, path))
    return household


def create_household(
    db: Session,
    directory: UserDirectoryClient,
    *,
    name: str | None,
    owner_id: str | None,
    first_address_line: str | None,
    city: str | None,
    state: str | None,
    zip_code: int | None,
    second_address_line: str | None = None,
) -> HouseholdModel:
    """
    Create a household and enroll its owner as the first member.

    - Validates every structural field, reporting all violations at once
    - Validates the owner exists in the user directory
    - Inserts the household and the owner's membership in one transaction

    Raises:
        DomainValidationError: If any field is missing or malformed
        UserNotFoundError: If the owner is unknown to the user directory
        UserAlreadyInHouseholdError: If the owner already belongs to a household
        DirectoryUnavailableError: If the user directory cannot answer
    """
    errors = validate_household_fields(
        name=name,
        owner_id=owner_id,
        first_address_line=first_address_line,
        second_address_line=second_address_line,
        city=city,
        state=state,
        zip_code=zip_code,
    )
    if errors:
        raise _logged(
            DomainValidationError(
                "Could not create new household.", errors, HOUSEHOLDS_PATH
            )
        )

    _require_user(
        directory,
        owner_id,
        f"Could not create new household because owner with id {owner_id} does not exist.",
        HOUSEHOLDS_PATH,
    )

    household = household_repo.create_household(
        db,
        name=name,
        owner_id=owner_id,
        first_address_line=first_address_line,
        second_address_line=second_address_line or "",
        city=city,
        state=state,
        zip_code=zip_code,
    )
    try:
        lookup_repo.create_lookup(db, user_id=owner_id, household_id=household.id)
    except DuplicateResourceError as exc:
        # The rollback in create_lookup discarded the household row as well.
        raise _logged(
            UserAlreadyInHouseholdError(
                f"Could not create new household because owner with id {owner_id} "
                "is already in a household.",
                HOUSEHOLDS_PATH,
            )
        ) from exc

    db.commit()
    db.refresh(household)
    logger.info("Created household %s owned by user %s", household.id, owner_id)
    return household


def get_household(db: Session, household_id: int) -> HouseholdModel:
    """Get a household by ID.

    Raises:
        HouseholdNotFoundError: If the household doesn't exist
    """
    return _require_household(
        db,
        household_id,
        f"Could not find household with id {household_id}.",
        f"{HOUSEHOLDS_PATH}/{household_id}",
    )


def list_households(db: Session) -> list[HouseholdModel]:
    return household_repo.get_all_households(db)


def delete_household(db: Session, household_id: int) -> HouseholdModel:
    """
    Delete a household and return the removed record.

    - Validates household exists
    - Validates household has no members (memberships are never removed implicitly)

    Raises:
        HouseholdNotFoundError: If the household doesn't exist
        HouseholdHasMembersError: If any user still belongs to the household
    """
    path = f"{HOUSEHOLDS_PATH}/{household_id}"
    household = _require_household(
        db,
        household_id,
        f"Could not delete household because household with id {household_id} does not exist.",
        path,
    )

    members = lookup_repo.get_lookups_by_household_id(db, household_id)
    if members:
        raise _logged(
            HouseholdHasMembersError(
                f"Cannot delete household {household_id}: household has "
                f"{len(members)} member(s). Remove them first.",
                path,
            )
        )

    try:
        household_repo.delete_household(db, household_id)
        db.commit()
    except IntegrityError as exc:
        # A member was added between the check above and the delete.
        db.rollback()
        raise _logged(
            HouseholdHasMembersError(
                f"Cannot delete household {household_id}: household has members.",
                path,
            )
        ) from exc

    logger.info("Deleted household %s", household_id)
    return household


def list_members(
    db: Session, directory: UserDirectoryClient, household_id: int
) -> list[User]:
    """
    List the users that belong to a household, as known to the user directory.

    Members the directory no longer knows are skipped and logged.

    Raises:
        HouseholdNotFoundError: If the household doesn't exist
        DirectoryUnavailableError: If the user directory cannot answer
    """
    path = f"{HOUSEHOLDS_PATH}/{household_id}/users"
    _require_household(
        db, household_id, f"Could not find household with id {household_id}.", path
    )

    users: list[User] = []
    for lookup in lookup_repo.get_lookups_by_household_id(db, household_id):
        user = directory.get_user(lookup.user_id)
        if user is None:
            logger.warning(
                "User %s is a member of household %s but unknown to the user service",
                lookup.user_id,
                household_id,
            )
            continue
        users.append(user)
    return users


def add_member(
    db: Session,
    directory: UserDirectoryClient,
    user_id: str | None,
    household_id: int | None,
) -> LookupModel:
    """
    Add a user to a household.

    A user can belong to one household only: the request is rejected if the
    user already has a membership, whichever household it points to.

    Raises:
        DomainValidationError: If user_id or household_id is missing
        UserNotFoundError: If the user is unknown to the user directory
        HouseholdNotFoundError: If the household doesn't exist
        UserAlreadyInHouseholdError: If the user already belongs to a household
        DirectoryUnavailableError: If the user directory cannot answer
    """
    errors = validate_user_and_household(user_id=user_id, household_id=household_id)
    if errors:
        raise _logged(
            DomainValidationError(
                "Could not add user to household.", errors, MEMBERS_PATH
            )
        )

    _require_user(
        directory, user_id, f"Could not find user with id {user_id}.", MEMBERS_PATH
    )
    _require_household(
        db, household_id, f"Could not find household with id {household_id}.", MEMBERS_PATH
    )

    existing = lookup_repo.get_lookup_by_user_id(db, user_id)
    if existing is not None:
        raise _logged(
            UserAlreadyInHouseholdError(
                f"User with id {user_id} is already in household with id "
                f"{existing.household_id}.",
                MEMBERS_PATH,
            )
        )

    try:
        lookup = lookup_repo.create_lookup(db, user_id=user_id, household_id=household_id)
    except DuplicateResourceError as exc:
        # Lost a race with a concurrent request for the same user.
        raise _logged(
            UserAlreadyInHouseholdError(
                f"User with id {user_id} is already in a household.", MEMBERS_PATH
            )
        ) from exc
    except IntegrityError as exc:
        # The household was deleted after the existence check above.
        raise _logged(
            HouseholdNotFoundError(
                f"Could not find household with id {household_id}.", MEMBERS_PATH
            )
        ) from exc

    db.commit()
    db.refresh(lookup)
    logger.info("Added user %s to household %s", user_id, household_id)
    return lookup


def remove_member(
    db: Session,
    directory: UserDirectoryClient,
    user_id: str | None,
    household_id: int | None,
) -> LookupModel:
    """
    Remove a user from a household and return the removed membership.

    Raises:
        DomainValidationError: If user_id or household_id is missing
        UserNotFoundError: If the user is unknown to the user directory
        HouseholdNotFoundError: If the household doesn't exist, or the user is
            not a member of that household
        DirectoryUnavailableError: If the user directory cannot answer
    """
    errors = validate_user_and_household(user_id=user_id, household_id=household_id)
    if errors:
        raise _logged(
            DomainValidationError(
                "Could not remove user from household.", errors, MEMBERS_PATH
            )
        )

    _require_user(
        directory,
        user_id,
        f"Could not remove user with id {user_id} because the user does not exist.",
        MEMBERS_PATH,
    )
    _require_household(
        db,
        household_id,
        f"Could not remove user with id {user_id} because the household with id "
        f"{household_id} does not exist.",
        MEMBERS_PATH,
    )

    lookup = lookup_repo.get_lookup_by_user_id(db, user_id, for_update=True)
    if lookup is None or lookup.household_id != household_id:
        raise _logged(
            HouseholdNotFoundError(
                f"User with id {user_id} is not a member of household with id "
                f"{household_id}.",
                MEMBERS_PATH,
            )
        )

    lookup_repo.delete_lookup(db, lookup)
    db.commit()
    logger.info("Removed user %s from household %s", user_id, household_id)
    return lookup


def get_household_for_user(
    db: Session, directory: UserDirectoryClient, user_id: str
) -> HouseholdModel:
    """
    Get the household a user belongs to.

    Raises:
        UserNotFoundError: If the user is unknown to the user directory
        HouseholdNotFoundError: If the user has no membership, or the
            membership points to a household that no longer exists
        DirectoryUnavailableError: If the user directory cannot answer
    """
    path = f"{MEMBERS_PATH}/{user_id}"
    _require_user(directory, user_id, f"Could not find user with id {user_id}.", path)

    message = f"Could not find household for user with id {user_id}."
    lookup = lookup_repo.get_lookup_by_user_id(db, user_id)
    if lookup is None:
        raise _logged(HouseholdNotFoundError(message, path))
    return _require_household(db, lookup.household_id, message, path)
