"""Report Routes: HTTP surface of the report aggregate.

Invariants:
    - Bodies are validated by Pydantic (ReportInput) before reaching a handler
    - Handlers are pass-through: every decision lives in ReportStore
    - ReportNotFoundError → 404 {message}; validation → 400 {message, field} (global handlers)
    - DELETE is idempotent and always answers 204, even for ids that are
      out of range or not numeric

Design Decisions:
    - ReportStore built per request from the request's AsyncSession
    - Explicit model conversion on return: ORM rows never reach the encoder
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from progress_tracker.core.api_paths import REPORTS_PATH
from progress_tracker.core.domain_types import ReportId
from progress_tracker.infrastructure.database import get_db
from progress_tracker.schemas.report import (
    NotFoundResponse, ReportDetail, ReportInput, ReportSummary,
    ValidationErrorResponse,
)
from progress_tracker.services.report_store import ReportStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix=REPORTS_PATH, tags=["reports"])


def get_report_store(db: AsyncSession = Depends(get_db)) -> ReportStore:
    return ReportStore(db)


@router.get("", response_model=list[ReportSummary])
async def list_reports(store: ReportStore = Depends(get_report_store)):
    """List reports, most recent first (no buildings)."""
    reports = await store.list_reports()
    return [ReportSummary.model_validate(r) for r in reports]


@router.get(
    "/{report_id}", response_model=ReportDetail,
    responses={404: {"model": NotFoundResponse}},
)
async def get_report(
    report_id: int, store: ReportStore = Depends(get_report_store),
):
    """Get a report with all its buildings."""
    aggregate = await store.get_report(ReportId(report_id))
    return ReportDetail.from_aggregate(aggregate)


@router.post(
    "", response_model=ReportDetail,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}},
)
async def create_report(
    body: ReportInput, store: ReportStore = Depends(get_report_store),
):
    """Create a report together with its buildings."""
    aggregate = await store.create_report(body)
    return ReportDetail.from_aggregate(aggregate)


@router.put(
    "/{report_id}", response_model=ReportDetail,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundResponse},
    },
)
async def update_report(
    report_id: int,
    body: ReportInput,
    store: ReportStore = Depends(get_report_store),
):
    """Update a report and replace its whole building list."""
    aggregate = await store.update_report(ReportId(report_id), body)
    return ReportDetail.from_aggregate(aggregate)


@router.delete(
    "/{report_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_report(
    report_id: str, store: ReportStore = Depends(get_report_store),
):
    """Delete a report and its buildings. Missing ids are not an error."""
    try:
        parsed = ReportId(int(report_id))
    except ValueError:
        logger.debug(f"Delete of non-numeric report id {report_id!r} ignored")
    else:
        await store.delete_report(parsed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
