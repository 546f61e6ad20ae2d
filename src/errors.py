"""Report exception hierarchy.

Fatal failures raise one of these; malformed field values never do.
"""


class ReportError(Exception):
    """Base exception for all report failures."""


class FetchError(ReportError):
    """Raised when the source CSV cannot be fetched or parsed."""


class SchemaError(ReportError):
    """Raised when a required column is missing from the raw table."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Dataset is missing expected columns: {self.missing}")


class InsufficientDataError(ReportError):
    """Raised when a trend fit has fewer than two distinct years."""
