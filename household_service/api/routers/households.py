from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_service.api.deps import get_db, get_user_directory
from household_service.clients.user_directory import UserDirectoryClient
from household_service.schemas.household import Household, HouseholdCreate
from household_service.schemas.membership import HouseholdUserLookup, UserAndHousehold
from household_service.schemas.user import User
from household_service.services import household as household_service

router = APIRouter(prefix="/households", tags=["households"])


@router.get("", response_model=list[Household])
def get_all_households(db: Session = Depends(get_db)):
    """Get all households."""
    households = household_service.list_households(db)
    return [Household.model_validate(h) for h in households]


@router.post("", response_model=Household, status_code=status.HTTP_201_CREATED)
def create_new_household(
    household_data: HouseholdCreate,
    db: Session = Depends(get_db),
    directory: UserDirectoryClient = Depends(get_user_directory),
):
    """
    Create a new household. The owner must exist in the user service and is
    added as the household's first member.
    """
    household = household_service.create_household(
        db,
        directory,
        name=household_data.name,
        owner_id=household_data.owner_id,
        first_address_line=household_data.first_address_line,
        second_address_line=household_data.second_address_line,
        city=household_data.city,
        state=household_data.state,
        zip_code=household_data.zip_code,
    )
    return Household.model_validate(household)


# Membership routes are declared before "/{household_id}" so "users" is never
# parsed as a household id.
@router.post(
    "/users", response_model=HouseholdUserLookup, status_code=status.HTTP_201_CREATED
)
def add_user_to_household(
    membership: UserAndHousehold,
    db: Session = Depends(get_db),
    directory: UserDirectoryClient = Depends(get_user_directory),
):
    """
    Add a user to a household. A user can only belong to one household at a time.
    """
    lookup = household_service.add_member(
        db, directory, membership.user_id, membership.household_id
    )
    return HouseholdUserLookup.model_validate(lookup)


@router.delete("/users", response_model=HouseholdUserLookup)
def remove_user_from_household(
    membership: UserAndHousehold,
    db: Session = Depends(get_db),
    directory: UserDirectoryClient = Depends(get_user_directory),
):
    """Remove a user from a household. Returns the removed membership."""
    lookup = household_service.remove_member(
        db, directory, membership.user_id, membership.household_id
    )
    return HouseholdUserLookup.model_validate(lookup)


@router.get("/users/{user_id}", response_model=Household)
def get_household_for_user(
    user_id: str,
    db: Session = Depends(get_db),
    directory: UserDirectoryClient = Depends(get_user_directory),
):
    """Get the household the user belongs to."""
    household = household_service.get_household_for_user(db, directory, user_id)
    return Household.model_validate(household)


@router.get("/{household_id}", response_model=Household)
def get_household_by_id(household_id: int, db: Session = Depends(get_db)):
    """Get a household by ID."""
    household = household_service.get_household(db, household_id)
    return Household.model_validate(household)


@router.delete("/{household_id}", response_model=Household)
def delete_household_by_id(household_id: int, db: Session = Depends(get_db)):
    """
    Delete a household by ID. Returns the removed household.

    A household can only be deleted once all of its members, owner included,
    have been removed.
    """
    household = household_service.delete_household(db, household_id)
    return Household.model_validate(household)


@router.get("/{household_id}/users", response_model=list[User])
def get_users_in_household(
    household_id: int,
    db: Session = Depends(get_db),
    directory: UserDirectoryClient = Depends(get_user_directory),
):
    """Get the users that belong to a household."""
    return household_service.list_members(db, directory, household_id)
