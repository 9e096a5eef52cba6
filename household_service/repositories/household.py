from sqlalchemy.orm import Session

from household_service.db.models.household import Household as HouseholdModel


def get_household_by_id(db: Session, household_id: int) -> HouseholdModel | None:
    """Get a household by ID."""
    return db.query(HouseholdModel).filter(HouseholdModel.id == household_id).first()


def get_all_households(db: Session) -> list[HouseholdModel]:
    """Get all households, ordered by ID."""
    return db.query(HouseholdModel).order_by(HouseholdModel.id).all()


def create_household(
    db: Session,
    name: str,
    owner_id: str,
    first_address_line: str,
    city: str,
    state: str,
    zip_code: int,
    second_address_line: str = "",
) -> HouseholdModel:
    """
    Add a new household to the session. Pure data access - no business logic.

    The row is flushed so its ID is assigned; committing is left to the caller.
    """
    db_household = HouseholdModel(
        name=name,
        owner_id=owner_id,
        first_address_line=first_address_line,
        second_address_line=second_address_line,
        city=city,
        state=state,
        zip_code=zip_code,
    )
    db.add(db_household)
    db.flush()
    return db_household


def delete_household(db: Session, household_id: int) -> HouseholdModel | None:
    """Delete a household by ID. Returns the removed household, or None if absent."""
    household = get_household_by_id(db, household_id)
    if household is None:
        return None
    db.delete(household)
    db.flush()
    return household
