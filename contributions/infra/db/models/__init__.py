"""
SQLAlchemy models for the contribution store.
"""
from contributions.infra.db.base import Base

# Import all models so they're registered with Base
from contributions.infra.db.models.contributor import Contributor

__all__ = [
    "Base",
    "Contributor",
]
