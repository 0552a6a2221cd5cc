"""
Domain errors - every failure carries a kind so callers get a structured result.
"""

from collections.abc import Iterable


class ReportError(Exception):
    """Base class of report failures."""

    kind = "ReportError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class DataUnavailable(ReportError):
    """The upstream data feed failed; not retried in this layer."""

    kind = "DataUnavailable"

    def __init__(self, operation: str, reason: str = ""):
        message = f"Data unavailable for {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation

    def to_dict(self) -> dict:
        return {**super().to_dict(), "operation": self.operation}


class InvalidParameter(ReportError):
    """An enumerated parameter is outside its fixed value set."""

    kind = "InvalidParameter"

    def __init__(self, name: str, value: object, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(f"{name} must be one of: {', '.join(allowed)} (got {value!r})")
        self.name = name
        self.value = value
        self.allowed = allowed
