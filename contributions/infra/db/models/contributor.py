"""
Contributor SQLAlchemy model.

One row records a contribution by a uid: when it started and how it ended.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from contributions.infra.db.base import Base


class Contributor(Base):
    """
    A contribution made by a single uid.

    The table carries no primary key or unique constraint on ``uid``; the
    mapper treats ``uid`` as the identity so the physical table keeps exactly
    its four columns.
    """

    __tablename__ = "contributors"

    uid: Mapped[str] = mapped_column(String, nullable=False, index=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    finished_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expired_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __mapper_args__ = {"primary_key": [uid]}

    def __repr__(self) -> str:
        return (
            f"<Contributor(uid={self.uid}, started_at={self.started_at}, "
            f"finished_at={self.finished_at}, expired_at={self.expired_at})>"
        )
