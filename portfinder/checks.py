"""
Input validation shared by the scanners and the public API.
Every check runs before any socket is opened.
"""
from .errors import PortFinderError

MIN_PORT = 1
MAX_PORT = 65535


def _is_int(value) -> bool:
    # bool is an int subclass, but True is not a port
    return isinstance(value, int) and not isinstance(value, bool)


def validate_port(port) -> None:
    if not _is_int(port) or port < MIN_PORT or port > MAX_PORT:
        raise PortFinderError(
            f"Port must be an integer between {MIN_PORT} and {MAX_PORT}",
            PortFinderError.INVALID_PORT,
            {"port": port},
        )


def validate_port_range(start, end) -> None:
    validate_port(start)
    validate_port(end)
    if start > end:
        raise PortFinderError(
            "Start port must be less than or equal to end port",
            PortFinderError.INVALID_RANGE,
            {"start": start, "end": end},
        )


def validate_count(count) -> None:
    if not _is_int(count) or count <= 0:
        raise PortFinderError(
            "Count must be a positive integer",
            PortFinderError.INVALID_COUNT,
            {"count": count},
        )


def validate_concurrency(max_concurrency) -> None:
    if not _is_int(max_concurrency) or max_concurrency <= 0:
        raise PortFinderError(
            "Concurrency must be a positive integer",
            PortFinderError.INVALID_CONCURRENCY,
            {"max_concurrency": max_concurrency},
        )
