"""
API Schemas package.
"""
from .contributors import ContributionStatus, ContributorDetail, ErrorResponse

__all__ = [
    "ContributionStatus",
    "ContributorDetail",
    "ErrorResponse",
]
