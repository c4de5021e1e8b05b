from .user import User, PlanType
from .check_in import CheckIn
from .community_summary import CommunitySummary

__all__ = [
    "User",
    "PlanType",
    "CheckIn",
    "CommunitySummary",
]
