from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from household_service.db.base import Base
from household_service.domain.validation import USER_ID_MAX_LENGTH


class HouseholdUserLookup(Base):
    __tablename__ = "household_user_lookups"
    # One membership per user; concurrent inserts for the same user conflict here.
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_household_user_lookups_user_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(USER_ID_MAX_LENGTH), nullable=False)
    household_id = Column(
        Integer, ForeignKey("households.id"), nullable=False, index=True
    )
