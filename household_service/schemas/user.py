from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """A user record as returned by the user service."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
