"""Domain Types: identity types, construction phases, and progress constants.

Invariants:
    - ReportId, BuildingId wrap ints: ids are assigned by the store, never by callers
    - Phase has exactly 8 members; order matches the editor grid
    - PERCENTAGE_CHOICES is the closed set of progress values a phase can hold
    - A report holds at most MAX_BUILDINGS_PER_REPORT buildings
    - Ids outside 1..MAX_ID never name a stored row

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Phase.value is the snake_case column prefix; field names derive from it
"""

from datetime import datetime, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ReportId = NewType("ReportId", int)
BuildingId = NewType("BuildingId", int)


# ─── Constants ───────────────────────────────────────────────────

MAX_BUILDINGS_PER_REPORT = 15

# Integer primary keys are int4 on PostgreSQL
MAX_ID = 2**31 - 1

PERCENTAGE_CHOICES: tuple[str, ...] = (
    "0%", "10%", "20%", "25%", "30%", "40%", "50%",
    "60%", "70%", "75%", "80%", "90%", "100%",
)


# ─── Enums ───────────────────────────────────────────────────────

class Phase(str, Enum):
    """The 8 tracked construction phases, in grid order."""
    VENT = "vent"
    COPPER = "copper"
    FLEX = "flex"
    AIR_HANDLER = "air_handler"
    CONDENSER = "condenser"
    WALL_CAPS = "wall_caps"
    TRIM = "trim"
    START_UPS = "start_ups"

    @property
    def label(self) -> str:
        return _PHASE_LABELS[self]

    @property
    def pct_field(self) -> str:
        return f"{self.value}_pct"

    @property
    def notes_field(self) -> str:
        return f"{self.value}_notes"


_PHASE_LABELS = {
    Phase.VENT: "Vent",
    Phase.COPPER: "Copper",
    Phase.FLEX: "Flex",
    Phase.AIR_HANDLER: "Air Handler",
    Phase.CONDENSER: "Condenser",
    Phase.WALL_CAPS: "Wall Caps",
    Phase.TRIM: "Trim",
    Phase.START_UPS: "Start-Ups",
}

PCT_FIELDS: tuple[str, ...] = tuple(p.pct_field for p in Phase)
PHASE_FIELDS: tuple[str, ...] = tuple(
    f for p in Phase for f in (p.pct_field, p.notes_field)
)


def phase_for_field(field_name: str) -> Phase:
    """Phase owning a *_pct or *_notes field name."""
    return Phase(field_name.rsplit("_", 1)[0])


def is_valid_percentage(value: str | None) -> bool:
    """None and "" mean 'not set'; anything else must be a known choice."""
    return value is None or value == "" or value in PERCENTAGE_CHOICES


def is_storable_id(value: int) -> bool:
    """Whether an id can name a stored row at all."""
    return 1 <= value <= MAX_ID


def as_utc(value: datetime) -> datetime:
    """Aware datetime in UTC. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
