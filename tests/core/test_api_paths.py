"""Route Table: placeholder substitution."""

from progress_tracker.core.api_paths import REPORT_PATH, REPORTS_PATH, build_url


def test_build_url_substitutes_id():
    assert build_url(REPORT_PATH, report_id=12) == "/api/reports/12"


def test_build_url_without_params_returns_path():
    assert build_url(REPORTS_PATH) == "/api/reports"


def test_build_url_ignores_unknown_params():
    assert build_url(REPORT_PATH, other=1) == REPORT_PATH
