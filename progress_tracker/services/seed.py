"""Bootstrap Seed: inserts a sample report the first time the service starts.

Invariants:
    - Idempotent: seeds only when the store holds zero reports
    - Runs once, from the application lifespan, never from request handlers
    - Seed data passes the same validation as user input

Design Decisions:
    - Guarded by SEED_ON_STARTUP so production deployments can opt out
"""

import logging

from progress_tracker.core.repository_protocols import ReportRepository
from progress_tracker.schemas.report import validate_report_input

logger = logging.getLogger(__name__)

SAMPLE_REPORT = {
    "projectName": "McKinney",
    "reportDate": "2025-10-03T00:00:00+00:00",
    "buildings": [
        {
            "name": "Building 1",
            "ventPct": "100%",
            "ventNotes": "Vent pipe run Waiting on bath housings",
            "copperPct": "100%",
            "copperNotes": "",
            "flexPct": "100%",
            "flexNotes": "",
            "airHandlerPct": "100%",
            "airHandlerNotes": "",
            "condenserPct": "100%",
            "condenserNotes": "",
            "wallCapsPct": "100%",
            "wallCapsNotes": "",
            "trimPct": "100%",
            "trimNotes": "",
            "startUpsPct": "100%",
            "startUpsNotes": "",
        },
        {
            "name": "Building 2",
            "ventPct": "",
            "ventNotes": "Vent pipe run Waiting on bath housings",
            "copperPct": "",
            "copperNotes": "Copper run needing nail plates and fire caulk",
            "flexPct": "",
            "flexNotes": "Boots hung and working on plenums, no flex run",
            "airHandlerPct": "",
            "airHandlerNotes": "",
            "condenserPct": "",
            "condenserNotes": "",
            "wallCapsPct": "25%",
            "wallCapsNotes": "waiting on stucco/brick",
            "trimPct": "",
            "trimNotes": "Waiting",
            "startUpsPct": "",
            "startUpsNotes": "",
        },
    ],
}


async def seed_if_empty(store: ReportRepository) -> bool:
    """Insert SAMPLE_REPORT when no reports exist. Returns True if it seeded."""
    if await store.count_reports() > 0:
        logger.debug("Seed skipped: reports already present")
        return False
    aggregate = await store.create_report(validate_report_input(SAMPLE_REPORT))
    logger.info(
        "Seeded sample report",
        extra={"report_id": aggregate.report.id},
    )
    return True
