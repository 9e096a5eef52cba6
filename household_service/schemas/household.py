from pydantic import BaseModel, ConfigDict


class Household(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner_id: str
    first_address_line: str
    second_address_line: str
    city: str
    state: str
    zip_code: int


class HouseholdCreate(BaseModel):
    # Presence and content rules are checked by the service so that every
    # violation is reported together.
    name: str | None = None
    owner_id: str | None = None
    first_address_line: str | None = None
    second_address_line: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: int | None = None
