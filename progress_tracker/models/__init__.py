"""ORM Models: SQLAlchemy declarative models for reports and buildings.

Invariants:
    - All models inherit from Base (db/base.py)
    - Report is the aggregate root; buildings are scoped by report_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from progress_tracker.models.report import Report  # noqa: F401
from progress_tracker.models.building import Building  # noqa: F401
