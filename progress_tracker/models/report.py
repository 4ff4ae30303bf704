"""Report ORM: the aggregate root of a weekly progress snapshot.

Invariants:
    - id is an integer primary key, assigned by the store and never reused
    - project_name is non-nullable text
    - report_date is timezone-aware and always set (defaults to now)

Design Decisions:
    - No ORM relationship to Building: ReportStore reads and replaces the
      collection with explicit statements, so the list query never loads children
    - sqlite_autoincrement: SQLite would otherwise recycle the highest deleted rowid
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from progress_tracker.db.base import Base


class Report(Base):
    """Report aggregate root: exclusively owns its Buildings."""
    __tablename__ = "reports"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    project_name: Mapped[str] = mapped_column(Text, nullable=False)
    report_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
