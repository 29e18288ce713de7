"""
Repository layer for database operations.
"""
from contributions.infra.db.repositories.base import BaseRepository
from contributions.infra.db.repositories.contributor import ContributionStore, WriteResult

__all__ = [
    "BaseRepository",
    "ContributionStore",
    "WriteResult",
]
