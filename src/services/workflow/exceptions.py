"""Domain exceptions for calls to the upstream workflow backend.

The taxonomy keeps the three user-visible failure classes apart: the backend
could not be reached, it refused our credential, or it answered with some
other error. "No usable result" is not an exception; it is reported through
``StreamOutcome.status == "empty"``. Each exception carries a stable
``error_code`` used by the API error envelope and by SSE error events.
"""


class WorkflowError(Exception):
    """Base class for upstream workflow errors."""

    error_code = "workflow_error"
    default_message = "Workflow call failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UpstreamUnavailable(WorkflowError):
    error_code = "network_error"
    default_message = "Workflow backend is unreachable"


class UpstreamUnauthorized(WorkflowError):
    error_code = "auth_failed"
    default_message = "Workflow backend rejected the API key"


class UpstreamRejected(WorkflowError):
    error_code = "upstream_error"
    default_message = "Workflow backend returned an error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class WorkflowNotConfigured(WorkflowError):
    error_code = "not_configured"
    default_message = "Workflow API key is not configured"
