from sqlalchemy import Column, Integer, String

from household_service.db.base import Base
from household_service.domain.validation import (
    ADDRESS_LINE_MAX_LENGTH,
    CITY_MAX_LENGTH,
    NAME_MAX_LENGTH,
    STATE_MAX_LENGTH,
    USER_ID_MAX_LENGTH,
)


class Household(Base):
    __tablename__ = "households"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    owner_id = Column(String(USER_ID_MAX_LENGTH), nullable=False)
    first_address_line = Column(String(ADDRESS_LINE_MAX_LENGTH), nullable=False)
    second_address_line = Column(
        String(ADDRESS_LINE_MAX_LENGTH), nullable=False, default=""
    )
    city = Column(String(CITY_MAX_LENGTH), nullable=False)
    state = Column(String(STATE_MAX_LENGTH), nullable=False)
    zip_code = Column(Integer, nullable=False)
