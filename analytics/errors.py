"""
Domain errors raised by the analytics engines.

Each kind maps to a distinct caller-visible signal in the API layer.
"""


class ReitAnalyticsError(Exception):
    """Base exception for REIT analytics errors."""
    pass


class ReitNotFoundError(ReitAnalyticsError):
    """Raised when a ticker is absent from the snapshot store."""

    def __init__(self, message: str = "REIT not found"):
        super().__init__(message)


class NoHistoryError(ReitAnalyticsError):
    """Raised when a REIT exists but has no usable price series."""

    def __init__(self, message: str = "No history available"):
        super().__init__(message)


class InvalidAssumptionError(ReitAnalyticsError):
    """Raised when the discount rate is not positive or does not exceed growth."""

    def __init__(self, message: str = "Invalid discount or growth rate"):
        super().__init__(message)
