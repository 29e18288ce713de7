"""
API Schemas for Contributors.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ContributionStatus(BaseModel):
    """Whether a uid has contributed."""
    uid: str
    has_contributed: bool


class ContributorDetail(BaseModel):
    """A stored contributor record."""
    uid: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Body returned when the store fails a query."""
    error: str
