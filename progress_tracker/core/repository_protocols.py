"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO
"""

from typing import Any, Protocol, Sequence

from progress_tracker.core.domain_types import ReportId


class ReportRepository(Protocol):
    """Contract for report aggregate persistence: implemented by services.ReportStore."""
    async def list_reports(self) -> Sequence[Any]: ...
    async def count_reports(self) -> int: ...
    async def get_report(self, report_id: ReportId) -> Any: ...
    async def create_report(self, data: Any) -> Any: ...
    async def update_report(self, report_id: ReportId, data: Any) -> Any: ...
    async def delete_report(self, report_id: ReportId) -> None: ...
