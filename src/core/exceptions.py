class DomainError(Exception):
    """Base class for domain-specific errors."""

    pass


class UnsupportedDocumentError(DomainError):
    """Exception raised when an uploaded document has an unsupported extension."""

    pass


class UnknownJobSelectionError(DomainError):
    """Exception raised when a job selection is not offered by the workflow."""

    pass
