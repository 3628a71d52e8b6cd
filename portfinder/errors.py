from typing import Any, Optional


class PortFinderError(Exception):
    """
    Raised for invalid input and for caller-level scan failures.
    `code` is a stable identifier, `details` carries the offending values.
    """
    INVALID_PORT = "INVALID_PORT"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_COUNT = "INVALID_COUNT"
    INVALID_CONCURRENCY = "INVALID_CONCURRENCY"
    INVALID_VALIDATOR = "INVALID_VALIDATOR"
    INVALID_CONFIG = "INVALID_CONFIG"
    UNKNOWN_VALIDATOR = "UNKNOWN_VALIDATOR"
    NO_AVAILABLE_PORT = "NO_AVAILABLE_PORT"
    INSUFFICIENT_PORTS = "INSUFFICIENT_PORTS"

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code, "details": self.details}

    def __repr__(self):
        return f"PortFinderError({self.message!r}, code={self.code!r})"
