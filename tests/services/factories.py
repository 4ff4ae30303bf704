"""Input builders shared by store, route, and client tests."""

from progress_tracker.schemas.report import BuildingInput, ReportInput


def make_building(name: str, **fields) -> BuildingInput:
    return BuildingInput(name=name, **fields)


def make_report(
    project_name: str = "McKinney",
    buildings: list[BuildingInput] | None = None,
    **fields,
) -> ReportInput:
    return ReportInput(
        project_name=project_name, buildings=buildings or [], **fields,
    )
