"""Route Table: HTTP paths shared by the API router and the client.

Invariants:
    - REPORT_PATH placeholders use FastAPI syntax ({name}) so the router can mount them as-is
    - build_url() leaves unknown placeholders untouched

Design Decisions:
    - One table for both sides: a renamed path cannot drift between server and client
"""

REPORTS_PATH = "/api/reports"
REPORT_PATH = "/api/reports/{report_id}"
HEALTH_PATH = "/api/health"


def build_url(path: str, **params: str | int) -> str:
    """Substitute {name} placeholders in a route path."""
    url = path
    for key, value in params.items():
        url = url.replace("{" + key + "}", str(value))
    return url
