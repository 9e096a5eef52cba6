from pydantic import BaseModel, ConfigDict


class HouseholdUserLookup(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    household_id: int


class UserAndHousehold(BaseModel):
    """Body of the add/remove member requests."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    user_id: str | None = None
    household_id: int | None = None
