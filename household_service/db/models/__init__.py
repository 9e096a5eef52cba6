from household_service.db.models.household import Household
from household_service.db.models.household_user_lookup import HouseholdUserLookup

__all__ = ["Household", "HouseholdUserLookup"]
