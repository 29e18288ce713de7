"""
Database infrastructure layer.

Provides the SQLAlchemy model, session management and the contribution store.
"""
from contributions.infra.db.base import Base
from contributions.infra.db.errors import DatabaseError, StorageError
from contributions.infra.db.models import Contributor
from contributions.infra.db.repositories import BaseRepository, ContributionStore, WriteResult
from contributions.infra.db.session import (
    build_store,
    close_db,
    connect_store,
    create_engine,
    create_session_factory,
    init_db,
)

__all__ = [
    # Base
    "Base",
    # Errors
    "StorageError",
    "DatabaseError",
    # Models
    "Contributor",
    # Repositories
    "BaseRepository",
    "ContributionStore",
    "WriteResult",
    # Session
    "create_engine",
    "create_session_factory",
    "init_db",
    "build_store",
    "connect_store",
    "close_db",
]
