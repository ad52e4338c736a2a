"""Exceptions raised by the viral chart core and services."""

from typing import List, Optional


class ViralChartError(Exception):
    """Base class for all viral chart errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SubmissionValidationError(ViralChartError):
    """A submission is missing required fields or carries a malformed URL."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        self.fields = fields or []
        super().__init__(message)


class SubmissionInFlightError(ViralChartError):
    """Another submission is still being processed."""


class MetricsError(ViralChartError):
    """Engagement metrics are malformed (e.g. negative counts)."""


class FeedError(ViralChartError):
    """The chart feed could not be read or failed validation."""
