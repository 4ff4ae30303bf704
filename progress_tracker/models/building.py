"""Building ORM: one tracked structure within a Report.

Invariants:
    - Always belongs to a Report (report_id FK, non-nullable)
    - name is non-nullable text
    - Each of the 8 phases has an independent nullable pct/notes pair

Design Decisions:
    - ON DELETE CASCADE at the database level backs up the explicit child delete
      in ReportStore.delete_report
    - Phase columns spelled out rather than generated: migrations and type
      checkers see every column
"""

from sqlalchemy import Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from progress_tracker.db.base import Base


class Building(Base):
    """Building entity: phase-level progress for one structure."""
    __tablename__ = "buildings"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reports.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    vent_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    vent_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    copper_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    copper_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    flex_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    flex_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    air_handler_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    air_handler_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    condenser_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    condenser_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    wall_caps_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    wall_caps_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    trim_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    trim_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    start_ups_pct: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_ups_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
