"""Reports Client: async data access to the report API with a read cache.

Invariants:
    - Responses decoded with the same Pydantic schemas the server emits
    - create invalidates the cached list; update and delete invalidate the list
      AND the cached detail for that id; failed mutations invalidate nothing
    - get_report returns None on 404; update_report raises ReportNotFoundError
    - 400 → ReportValidationError(message, field); other non-2xx → ReportsApiError

Design Decisions:
    - Caller owns the httpx.AsyncClient (base_url, timeouts, transport), so tests
      can point it at the ASGI app in-process
    - Plain dict cache: a cached read is only as fresh as the last invalidation;
      callers must not treat it as server truth
"""

import logging
from typing import Any

import httpx

from progress_tracker.core.api_paths import REPORT_PATH, REPORTS_PATH, build_url
from progress_tracker.core.errors import (
    ReportNotFoundError, ReportValidationError,
)
from progress_tracker.schemas.report import (
    ReportDetail, ReportInput, ReportSummary,
)

logger = logging.getLogger(__name__)

_LIST_KEY = "list"


class ReportsApiError(Exception):
    """Non-2xx response the client has no specific mapping for."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ReportsClient:
    """Typed access to /api/reports with list/detail caching."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http
        self._cache: dict[Any, Any] = {}

    # --- Queries ----------------------------------------------------------------

    async def list_reports(self) -> list[ReportSummary]:
        if _LIST_KEY in self._cache:
            return self._cache[_LIST_KEY]
        res = await self.http.get(REPORTS_PATH)
        if res.status_code != 200:
            raise ReportsApiError(res.status_code, "Failed to fetch reports")
        reports = [ReportSummary.model_validate(r) for r in res.json()]
        self._cache[_LIST_KEY] = reports
        return reports

    async def get_report(self, report_id: int) -> ReportDetail | None:
        key = (REPORT_PATH, report_id)
        if key in self._cache:
            return self._cache[key]
        res = await self.http.get(build_url(REPORT_PATH, report_id=report_id))
        if res.status_code == 404:
            return None
        if res.status_code != 200:
            raise ReportsApiError(res.status_code, "Failed to fetch report")
        report = ReportDetail.model_validate(res.json())
        self._cache[key] = report
        return report

    # --- Mutations --------------------------------------------------------------

    async def create_report(self, data: ReportInput) -> ReportDetail:
        res = await self.http.post(REPORTS_PATH, json=_encode(data))
        if res.status_code != 201:
            _raise_for_mutation(res, "Failed to create report")
        self.invalidate(list_only=True)
        return ReportDetail.model_validate(res.json())

    async def update_report(
        self, report_id: int, data: ReportInput,
    ) -> ReportDetail:
        res = await self.http.put(
            build_url(REPORT_PATH, report_id=report_id), json=_encode(data),
        )
        if res.status_code == 404:
            raise ReportNotFoundError(report_id)
        if res.status_code != 200:
            _raise_for_mutation(res, "Failed to update report")
        self.invalidate(report_id)
        return ReportDetail.model_validate(res.json())

    async def delete_report(self, report_id: int) -> None:
        res = await self.http.delete(build_url(REPORT_PATH, report_id=report_id))
        if res.status_code != 204:
            _raise_for_mutation(res, "Failed to delete report")
        self.invalidate(report_id)

    def invalidate(
        self, report_id: int | None = None, list_only: bool = False,
    ) -> None:
        """Drop the cached list and, if given, the cached detail for report_id."""
        self._cache.pop(_LIST_KEY, None)
        if not list_only and report_id is not None:
            self._cache.pop((REPORT_PATH, report_id), None)


def _encode(data: ReportInput) -> dict:
    return data.model_dump(mode="json", by_alias=True, exclude_none=True)


def _raise_for_mutation(res: httpx.Response, fallback: str) -> None:
    if res.status_code == 400:
        body = res.json()
        raise ReportValidationError(
            body.get("message", "Validation failed"), body.get("field") or "",
        )
    logger.warning(f"{fallback}: HTTP {res.status_code}")
    raise ReportsApiError(res.status_code, fallback)
