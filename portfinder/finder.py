"""
Caller-facing API.

Validates options, resolves validator names against a registry, picks a
scanning strategy and turns short scan results into PortFinderError.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from .checks import validate_count, validate_port, validate_port_range
from .errors import PortFinderError
from .probe import DEFAULT_HOST, DEFAULT_TIMEOUT, check_port
from .scanner import DEFAULT_CONCURRENCY, PortScanner
from .validators import ValidatorRegistry

logger = logging.getLogger(__name__)

DEFAULT_START_PORT = 3000
DEFAULT_END_PORT = 65535


async def is_port_available(port: int, host: str = DEFAULT_HOST, timeout: float = DEFAULT_TIMEOUT) -> bool:
    validate_port(port)
    return await check_port(port, host, timeout)


def _prepare(start, end, exclude, validators, registry):
    validate_port_range(start, end)
    registry = registry if registry is not None else ValidatorRegistry()
    predicate = registry.resolve(validators).unwrap()
    return set(exclude), predicate


async def find_port(
    start: int = DEFAULT_START_PORT,
    end: int = DEFAULT_END_PORT,
    exclude: Iterable[int] = (),
    host: str = DEFAULT_HOST,
    validators: Sequence[str] = (),
    registry: Optional[ValidatorRegistry] = None,
    max_concurrency: int = DEFAULT_CONCURRENCY,
    timeout: float = DEFAULT_TIMEOUT,
) -> int:
    """
    Returns the first free port in start..end.

    Raises PortFinderError with code NO_AVAILABLE_PORT when the range holds none.
    """
    exclude = list(exclude)
    validators = list(validators)
    excluded, predicate = _prepare(start, end, exclude, validators, registry)

    scanner = PortScanner(host=host, timeout=timeout, concurrency=max_concurrency)
    results = await scanner.scan_parallel(start, end, excluded, predicate, count=1)

    if not results:
        raise PortFinderError(
            f"No available port found between {start} and {end}",
            PortFinderError.NO_AVAILABLE_PORT,
            {"start": start, "end": end, "exclude": exclude, "validators": validators},
        )
    logger.debug("Picked port %d", results[0])
    return results[0]


async def find_ports(
    count: int,
    start: int = DEFAULT_START_PORT,
    end: int = DEFAULT_END_PORT,
    exclude: Iterable[int] = (),
    host: str = DEFAULT_HOST,
    validators: Sequence[str] = (),
    consecutive: bool = False,
    registry: Optional[ValidatorRegistry] = None,
    max_concurrency: int = DEFAULT_CONCURRENCY,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[int]:
    """
    Returns `count` free ports, adjacent ones when `consecutive` is set.

    Consecutive requests use the sequential scanner, everything else the
    windowed parallel one. Raises PortFinderError with code INSUFFICIENT_PORTS
    when fewer than `count` ports are found; `details` lists what was found.
    """
    validate_count(count)
    excluded, predicate = _prepare(start, end, list(exclude), list(validators), registry)

    scanner = PortScanner(host=host, timeout=timeout, concurrency=max_concurrency)
    if consecutive:
        results = await scanner.scan_sequential(start, end, excluded, predicate, count, consecutive=True)
    else:
        results = await scanner.scan_parallel(start, end, excluded, predicate, count)

    if len(results) < count:
        raise PortFinderError(
            f"Could only find {len(results)} available ports out of {count} requested",
            PortFinderError.INSUFFICIENT_PORTS,
            {"requested": count, "found": len(results), "ports": results},
        )
    return results
