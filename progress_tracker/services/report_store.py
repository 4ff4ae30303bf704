"""Report Store: aggregate persistence for a report and its buildings.

Invariants:
    - Every write (create/update/delete) is ONE transaction: report row and
      building rows commit together or not at all
    - update_report replaces the whole building collection (delete-all, insert-all);
      it never merges with or diffs against the previous buildings
    - update_report/get_report on a missing id raise ReportNotFoundError with no writes
    - delete_report is idempotent: a missing id is a no-op
    - Ids outside the column range are missing without a round trip
    - report_date is stored in UTC
    - Buildings are deleted before their report (referential integrity)
    - Any SQLAlchemyError is rolled back and re-raised as DatabaseError, never retried

Design Decisions:
    - Explicit statements over ORM relationship cascades: the list query stays
      cheap and the replace step is visible in one place
    - Report row flushed before buildings are built: the generated id tags them
    - Reads order buildings by id: id order equals insertion order of the last write
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from progress_tracker.core.domain_types import ReportId, as_utc, is_storable_id
from progress_tracker.core.errors import ReportNotFoundError
from progress_tracker.infrastructure.database import map_database_error
from progress_tracker.models.building import Building
from progress_tracker.models.report import Report
from progress_tracker.schemas.report import BuildingInput, ReportInput

logger = logging.getLogger(__name__)


@dataclass
class ReportAggregate:
    """A report with its full building collection."""
    report: Report
    buildings: list[Building] = field(default_factory=list)


class ReportStore:
    """Reads and writes report aggregates through one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # --- Reads ------------------------------------------------------------------

    async def list_reports(self) -> list[Report]:
        """All reports, most recent report_date first. Buildings are not loaded."""
        async with self._reading("list"):
            result = await self.db.execute(
                select(Report).order_by(
                    Report.report_date.desc(), Report.id.desc(),
                ),
            )
            return list(result.scalars().all())

    async def count_reports(self) -> int:
        async with self._reading("count"):
            result = await self.db.execute(
                select(func.count()).select_from(Report),
            )
            return result.scalar_one()

    async def get_report(self, report_id: ReportId) -> ReportAggregate:
        async with self._reading("get"):
            report = await self._find_report(report_id)
            if report is None:
                raise ReportNotFoundError(report_id)
            buildings = await self._find_buildings(report_id)
            return ReportAggregate(report=report, buildings=buildings)

    # --- Writes -----------------------------------------------------------------

    async def create_report(self, data: ReportInput) -> ReportAggregate:
        async with self._transaction("create"):
            report = Report(
                project_name=data.project_name,
                report_date=_resolve_report_date(data),
            )
            self.db.add(report)
            await self.db.flush()
            buildings = await self._insert_buildings(report.id, data.buildings)

        logger.info(
            f"Created report {report.id} with {len(buildings)} building(s)",
            extra={"report_id": report.id, "building_count": len(buildings)},
        )
        return ReportAggregate(report=report, buildings=buildings)

    async def update_report(
        self, report_id: ReportId, data: ReportInput,
    ) -> ReportAggregate:
        async with self._transaction("update"):
            report = await self._find_report(report_id)
            if report is None:
                raise ReportNotFoundError(report_id)

            report.project_name = data.project_name
            report.report_date = _resolve_report_date(data)

            # Whole-collection replace: the saved grid becomes the stored grid
            await self.db.execute(
                delete(Building).where(Building.report_id == report_id),
            )
            buildings = await self._insert_buildings(report_id, data.buildings)

        logger.info(
            f"Updated report {report_id}, buildings replaced with {len(buildings)}",
            extra={"report_id": report_id, "building_count": len(buildings)},
        )
        return ReportAggregate(report=report, buildings=buildings)

    async def delete_report(self, report_id: ReportId) -> None:
        if not is_storable_id(report_id):
            logger.debug(
                f"Delete of out-of-range report {report_id} ignored",
                extra={"report_id": report_id},
            )
            return

        async with self._transaction("delete"):
            await self.db.execute(
                delete(Building).where(Building.report_id == report_id),
            )
            result = await self.db.execute(
                delete(Report).where(Report.id == report_id),
            )

        if result.rowcount:
            logger.info(
                f"Deleted report {report_id}", extra={"report_id": report_id},
            )
        else:
            logger.debug(
                f"Delete of missing report {report_id} ignored",
                extra={"report_id": report_id},
            )

    # --- Helpers ----------------------------------------------------------------

    async def _find_report(self, report_id: int) -> Report | None:
        if not is_storable_id(report_id):
            return None
        result = await self.db.execute(
            select(Report).where(Report.id == report_id),
        )
        return result.scalar_one_or_none()

    async def _find_buildings(self, report_id: int) -> list[Building]:
        result = await self.db.execute(
            select(Building)
            .where(Building.report_id == report_id)
            .order_by(Building.id),
        )
        return list(result.scalars().all())

    async def _insert_buildings(
        self, report_id: int, rows: list[BuildingInput],
    ) -> list[Building]:
        buildings = [
            Building(report_id=report_id, **row.model_dump()) for row in rows
        ]
        if buildings:
            self.db.add_all(buildings)
            await self.db.flush()
        return buildings

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[None]:
        """Commit on success; roll back on any failure."""
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Report {operation} rolled back: {e}",
                extra={"operation": operation},
            )
            raise map_database_error(e) from e
        except Exception:
            await self.db.rollback()
            raise

    @asynccontextmanager
    async def _reading(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Report {operation} failed: {e}",
                extra={"operation": operation},
            )
            raise map_database_error(e) from e


def _resolve_report_date(data: ReportInput) -> datetime:
    """Absent report_date means 'now', on create and on update alike."""
    if data.report_date is None:
        return datetime.now(timezone.utc)
    return as_utc(data.report_date)
