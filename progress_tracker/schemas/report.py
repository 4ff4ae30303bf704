"""Report Schemas: Pydantic models for the report aggregate at the API boundary.

Invariants:
    - JSON uses camelCase (projectName, ventPct); Python uses snake_case
    - ReportInput.project_name and BuildingInput.name: stripped, non-empty
    - ReportInput.buildings: 0..MAX_BUILDINGS_PER_REPORT entries
    - Every *_pct input is None, "" or one of PERCENTAGE_CHOICES
    - validate_report_input surfaces only the FIRST failing field (fail-fast)

Design Decisions:
    - Same input model for create and update: the editor always saves the whole grid
    - Response models read ORM rows via from_attributes; no hand-written mapping
    - Output models do not re-check percentages: rows written before the
      closed set existed must still be readable
"""

from datetime import datetime
from typing import Any, Sequence

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from progress_tracker.core.domain_types import (
    MAX_BUILDINGS_PER_REPORT, PCT_FIELDS, PERCENTAGE_CHOICES, BuildingId,
    ReportId, as_utc, is_valid_percentage, phase_for_field,
)
from progress_tracker.core.errors import ReportValidationError


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


# --- Input ---------------------------------------------------------------------

class BuildingInput(_CamelModel):
    """One building row of the editor grid."""
    name: str = Field(min_length=1)

    vent_pct: str | None = None
    vent_notes: str | None = None
    copper_pct: str | None = None
    copper_notes: str | None = None
    flex_pct: str | None = None
    flex_notes: str | None = None
    air_handler_pct: str | None = None
    air_handler_notes: str | None = None
    condenser_pct: str | None = None
    condenser_notes: str | None = None
    wall_caps_pct: str | None = None
    wall_caps_notes: str | None = None
    trim_pct: str | None = None
    trim_notes: str | None = None
    start_ups_pct: str | None = None
    start_ups_notes: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Building name cannot be empty")
        return v

    @field_validator(*PCT_FIELDS)
    @classmethod
    def check_percentage(
        cls, v: str | None, info: ValidationInfo,
    ) -> str | None:
        if not is_valid_percentage(v):
            label = phase_for_field(info.field_name).label
            raise ValueError(
                f"{label} percentage must be one of "
                f"{', '.join(PERCENTAGE_CHOICES)} or empty",
            )
        return v


class ReportInput(_CamelModel):
    """Create/update body: a report together with its full building list."""
    project_name: str = Field(min_length=1)
    report_date: datetime | None = None
    buildings: list[BuildingInput] = Field(
        default_factory=list, max_length=MAX_BUILDINGS_PER_REPORT,
    )

    @field_validator("project_name")
    @classmethod
    def strip_project_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty")
        return v


# --- Output --------------------------------------------------------------------

class ReportSummary(_CamelModel):
    """List entry: a report without its buildings."""
    id: ReportId
    project_name: str
    report_date: datetime

    @field_validator("report_date")
    @classmethod
    def report_date_in_utc(cls, v: datetime) -> datetime:
        # SQLite hands DateTime(timezone=True) back naive
        return as_utc(v)


class BuildingResponse(_CamelModel):
    id: BuildingId
    report_id: ReportId
    name: str

    vent_pct: str | None = None
    vent_notes: str | None = None
    copper_pct: str | None = None
    copper_notes: str | None = None
    flex_pct: str | None = None
    flex_notes: str | None = None
    air_handler_pct: str | None = None
    air_handler_notes: str | None = None
    condenser_pct: str | None = None
    condenser_notes: str | None = None
    wall_caps_pct: str | None = None
    wall_caps_notes: str | None = None
    trim_pct: str | None = None
    trim_notes: str | None = None
    start_ups_pct: str | None = None
    start_ups_notes: str | None = None


class ReportDetail(ReportSummary):
    """A report with its full building collection."""
    buildings: list[BuildingResponse] = Field(default_factory=list)

    @classmethod
    def from_aggregate(cls, aggregate: Any) -> "ReportDetail":
        """Build from a ReportAggregate (report row + building rows)."""
        report = aggregate.report
        return cls(
            id=report.id,
            project_name=report.project_name,
            report_date=report.report_date,
            buildings=[
                BuildingResponse.model_validate(b) for b in aggregate.buildings
            ],
        )


class ValidationErrorResponse(BaseModel):
    message: str
    field: str | None = None


class NotFoundResponse(BaseModel):
    message: str


# --- Validation helpers --------------------------------------------------------

# FastAPI prefixes request errors with where the value came from
_LOCATION_PREFIXES = {"body", "path", "query"}


def first_error(errors: Sequence[dict]) -> tuple[str, str]:
    """Reduce Pydantic errors to (message, dotted field path) of the first one."""
    if not errors:
        return "Invalid request data", ""
    err = errors[0]
    loc = list(err.get("loc", ()))
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    message = err.get("msg", "Invalid value")
    ctx = err.get("ctx") or {}
    if err.get("type") == "value_error" and "error" in ctx:
        message = str(ctx["error"])
    return message, ".".join(str(part) for part in loc)


def validate_report_input(raw: Any) -> ReportInput:
    """Validate untrusted input. Raises ReportValidationError on the first failure."""
    try:
        return ReportInput.model_validate(raw)
    except ValidationError as e:
        message, field = first_error(e.errors())
        raise ReportValidationError(message, field) from e
