from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from household_service.db.models.household_user_lookup import (
    HouseholdUserLookup as LookupModel,
)
from household_service.errors import DuplicateResourceError

USER_UNIQUE_CONSTRAINT = "uq_household_user_lookups_user_id"


def _violates_user_uniqueness(exc: IntegrityError) -> bool:
    diag = getattr(exc.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if constraint_name is not None:
        return constraint_name == USER_UNIQUE_CONSTRAINT
    # SQLite names the columns, not the constraint
    return "household_user_lookups.user_id" in str(exc.orig)


def get_lookup_by_user_id(
    db: Session, user_id: str, for_update: bool = False
) -> LookupModel | None:
    """Get the membership lookup for a user.

    With for_update the row is locked until the transaction ends (ignored by SQLite).
    """
    query = db.query(LookupModel).filter(LookupModel.user_id == user_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def get_lookups_by_household_id(db: Session, household_id: int) -> list[LookupModel]:
    """Get all membership lookups targeting a household."""
    return (
        db.query(LookupModel)
        .filter(LookupModel.household_id == household_id)
        .order_by(LookupModel.id)
        .all()
    )


def get_all_lookups(db: Session) -> list[LookupModel]:
    """Get all membership lookups."""
    return db.query(LookupModel).order_by(LookupModel.id).all()


def create_lookup(db: Session, user_id: str, household_id: int) -> LookupModel:
    """
    Add a membership lookup to the session. Pure data access - no business logic.

    On any integrity failure the session is rolled back, discarding everything
    flushed in the current transaction.

    Raises:
        DuplicateResourceError: If a lookup for user_id already exists
        IntegrityError: For any other constraint, e.g. household_id refers to
            no household
    """
    db_lookup = LookupModel(user_id=user_id, household_id=household_id)
    db.add(db_lookup)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        if not _violates_user_uniqueness(exc):
            raise
        raise DuplicateResourceError(
            f"A household lookup for user {user_id} already exists"
        ) from exc
    return db_lookup


def delete_lookup(db: Session, lookup: LookupModel) -> LookupModel:
    """Delete a membership lookup. Returns the removed lookup."""
    db.delete(lookup)
    db.flush()
    return lookup
