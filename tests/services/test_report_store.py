"""Report Store: aggregate persistence: atomicity, replace, cascade, idempotent delete.

Invariants:
    - create returns exactly the input buildings, ids populated
    - A failing building insert leaves no report behind
    - update replaces the building collection wholesale; a failing update keeps the old one
    - get/update on a missing id raise ReportNotFoundError without writing
    - delete is idempotent and removes every building of the report
    - ids are never reused after delete

Design Decisions:
    - Failures forced with model_construct (bypasses validation) so the
      database NOT NULL constraint rejects the building row
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from progress_tracker.core.domain_types import MAX_ID
from progress_tracker.core.errors import DatabaseError, ReportNotFoundError
from progress_tracker.models.building import Building
from progress_tracker.models.report import Report
from progress_tracker.schemas.report import BuildingInput, ReportInput
from tests.services.factories import make_building, make_report


def _broken_report(project_name: str = "Broken") -> ReportInput:
    return ReportInput.model_construct(
        project_name=project_name,
        report_date=None,
        buildings=[BuildingInput.model_construct(name=None)],
    )


# --- create -------------------------------------------------------------------

async def test_create_returns_report_with_input_buildings(store):
    data = make_report(buildings=[
        make_building("Building 1", vent_pct="100%", vent_notes="Run"),
        make_building("Building 2", vent_pct=""),
    ])

    aggregate = await store.create_report(data)

    assert aggregate.report.id is not None
    assert aggregate.report.project_name == "McKinney"
    assert [b.name for b in aggregate.buildings] == ["Building 1", "Building 2"]
    assert [b.vent_pct for b in aggregate.buildings] == ["100%", ""]
    assert aggregate.buildings[0].vent_notes == "Run"
    assert all(b.id is not None for b in aggregate.buildings)
    assert all(b.report_id == aggregate.report.id for b in aggregate.buildings)


async def test_create_without_buildings(store):
    aggregate = await store.create_report(make_report())
    assert aggregate.buildings == []


async def test_create_defaults_report_date_to_now(store):
    before = datetime.now(timezone.utc)
    aggregate = await store.create_report(make_report())
    assert aggregate.report.report_date >= before


async def test_create_keeps_given_report_date(store):
    when = datetime(2025, 10, 3, tzinfo=timezone.utc)
    aggregate = await store.create_report(make_report(report_date=when))
    assert aggregate.report.report_date == when


async def test_create_rolls_back_report_when_building_insert_fails(store):
    with pytest.raises(DatabaseError):
        await store.create_report(_broken_report())

    assert await store.count_reports() == 0


# --- get ----------------------------------------------------------------------

async def test_get_returns_buildings_in_insertion_order(store):
    created = await store.create_report(make_report(buildings=[
        make_building("C"), make_building("A"), make_building("B"),
    ]))

    aggregate = await store.get_report(created.report.id)

    assert [b.name for b in aggregate.buildings] == ["C", "A", "B"]


async def test_get_missing_report_raises_not_found(store):
    with pytest.raises(ReportNotFoundError) as exc_info:
        await store.get_report(9999)
    assert exc_info.value.report_id == 9999


# --- list ---------------------------------------------------------------------

async def test_list_orders_by_report_date_descending(store):
    for name, day in (("Old", 1), ("New", 20), ("Mid", 10)):
        await store.create_report(make_report(
            project_name=name,
            report_date=datetime(2025, 10, day, tzinfo=timezone.utc),
        ))

    reports = await store.list_reports()

    assert [r.project_name for r in reports] == ["New", "Mid", "Old"]


async def test_list_empty_store(store):
    assert await store.list_reports() == []


# --- update -------------------------------------------------------------------

async def test_update_replaces_whole_building_collection(store):
    created = await store.create_report(make_report(buildings=[
        make_building("Building 1", vent_pct="50%"),
        make_building("Building 2"),
    ]))
    report_id = created.report.id
    old_ids = {b.id for b in created.buildings}

    await store.update_report(report_id, make_report(
        project_name="McKinney Phase 2",
        buildings=[make_building("Building 3", trim_pct="10%")],
    ))
    aggregate = await store.get_report(report_id)

    assert aggregate.report.project_name == "McKinney Phase 2"
    assert [b.name for b in aggregate.buildings] == ["Building 3"]
    assert aggregate.buildings[0].trim_pct == "10%"
    assert not old_ids & {b.id for b in aggregate.buildings}


async def test_update_with_same_names_does_not_merge(store):
    created = await store.create_report(make_report(buildings=[
        make_building("Building 1", vent_pct="50%", vent_notes="Old note"),
    ]))

    await store.update_report(created.report.id, make_report(
        buildings=[make_building("Building 1", copper_pct="20%")],
    ))
    aggregate = await store.get_report(created.report.id)

    building = aggregate.buildings[0]
    assert building.copper_pct == "20%"
    assert building.vent_pct is None
    assert building.vent_notes is None


async def test_update_to_empty_buildings(store):
    created = await store.create_report(make_report(buildings=[
        make_building("Building 1"),
    ]))

    updated = await store.update_report(created.report.id, make_report())
    aggregate = await store.get_report(created.report.id)

    assert updated.buildings == []
    assert aggregate.buildings == []


async def test_update_missing_report_raises_without_side_effects(store):
    await store.create_report(make_report(buildings=[make_building("B1")]))

    with pytest.raises(ReportNotFoundError):
        await store.update_report(9999, make_report(
            buildings=[make_building("Ghost")],
        ))

    assert await store.count_reports() == 1
    result = await store.db.execute(
        select(Building).where(Building.name == "Ghost"),
    )
    assert result.scalars().all() == []


async def test_failed_update_keeps_previous_aggregate(store):
    created = await store.create_report(make_report(
        project_name="Original", buildings=[make_building("B1")],
    ))
    report_id = created.report.id

    with pytest.raises(DatabaseError):
        await store.update_report(report_id, _broken_report())

    aggregate = await store.get_report(report_id)
    assert aggregate.report.project_name == "Original"
    assert [b.name for b in aggregate.buildings] == ["B1"]


# --- delete -------------------------------------------------------------------

async def test_delete_removes_report_and_buildings(store, test_db):
    created = await store.create_report(make_report(buildings=[
        make_building("B1"), make_building("B2"),
    ]))
    report_id = created.report.id

    await store.delete_report(report_id)

    with pytest.raises(ReportNotFoundError):
        await store.get_report(report_id)
    result = await test_db.execute(
        select(Building).where(Building.report_id == report_id),
    )
    assert result.scalars().all() == []


async def test_delete_leaves_other_reports_untouched(store):
    keep = await store.create_report(make_report(
        project_name="Keep", buildings=[make_building("K1")],
    ))
    drop = await store.create_report(make_report(
        project_name="Drop", buildings=[make_building("D1")],
    ))

    await store.delete_report(drop.report.id)

    aggregate = await store.get_report(keep.report.id)
    assert [b.name for b in aggregate.buildings] == ["K1"]


async def test_delete_missing_report_is_idempotent(store):
    await store.delete_report(9999)
    await store.delete_report(9999)


async def test_ids_are_not_reused_after_delete(store, test_db):
    first = await store.create_report(make_report(project_name="First"))
    first_id = first.report.id
    await store.delete_report(first_id)

    second = await store.create_report(make_report(project_name="Second"))

    assert second.report.id > first_id
    result = await test_db.execute(select(Report.id))
    assert result.scalars().all() == [second.report.id]


async def test_count_reports(store):
    assert await store.count_reports() == 0
    await store.create_report(make_report())
    await store.create_report(make_report())
    assert await store.count_reports() == 2


async def test_out_of_range_ids_are_missing(store):
    await store.create_report(make_report(buildings=[make_building("B1")]))

    for report_id in (0, MAX_ID + 1, 2**64):
        with pytest.raises(ReportNotFoundError):
            await store.get_report(report_id)
        with pytest.raises(ReportNotFoundError):
            await store.update_report(report_id, make_report())
        await store.delete_report(report_id)

    assert await store.count_reports() == 1


async def test_report_date_stored_in_utc(store):
    plus_five = timezone(timedelta(hours=5))
    created = await store.create_report(make_report(
        report_date=datetime(2025, 10, 3, 10, tzinfo=plus_five),
    ))

    assert created.report.report_date.utcoffset() == timedelta(0)
    assert created.report.report_date.hour == 5
