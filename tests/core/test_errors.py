"""Error Hierarchy: status codes and public response bodies."""

from progress_tracker.core.errors import (
    DatabaseError, ErrorCategory, ErrorSeverity, ReportNotFoundError,
    ReportValidationError, TrackerError,
)


def test_validation_error_body_has_message_and_field():
    err = ReportValidationError("Project name cannot be empty", "projectName")
    assert err.http_status == 400
    assert err.category == ErrorCategory.VALIDATION
    assert err.to_response() == {
        "message": "Project name cannot be empty", "field": "projectName",
    }


def test_not_found_body_is_message_only():
    err = ReportNotFoundError(42)
    assert err.http_status == 404
    assert err.report_id == 42
    assert err.context.report_id == 42
    assert err.to_response() == {"message": "Report not found"}


def test_database_error_is_critical_5xx():
    err = DatabaseError("Integrity constraint violated", "commit")
    assert err.http_status >= 500
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.operation == "commit"
    assert err.to_response() == {
        "message": "Database commit failed: Integrity constraint violated",
    }


def test_all_errors_share_base():
    for err in (
        ReportValidationError("m", "f"),
        ReportNotFoundError(1),
        DatabaseError("m", "query"),
    ):
        assert isinstance(err, TrackerError)
        assert err.code
