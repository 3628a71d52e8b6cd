import asyncio
import logging
from typing import Callable, Iterable, List, Optional

from .checks import validate_concurrency, validate_count, validate_port_range
from .probe import DEFAULT_HOST, DEFAULT_TIMEOUT, check_port

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 100

Predicate = Optional[Callable[[int], bool]]


class PortScanner:
    """
    Finds free TCP ports on one host.

    Two strategies share the same probe:
    - scan_sequential walks the range one port at a time and is the only one
      that can find a block of adjacent ports.
    - scan_parallel filters the range first, then probes fixed-size windows
      concurrently until enough ports are found.
    """

    def __init__(self, host: str = DEFAULT_HOST, timeout: float = DEFAULT_TIMEOUT, concurrency: int = DEFAULT_CONCURRENCY):
        validate_concurrency(concurrency)
        self.host = host
        self.timeout = timeout
        self.concurrency = concurrency

    async def check(self, port: int) -> bool:
        return await check_port(port, self.host, self.timeout)

    async def scan_sequential(
        self,
        start: int,
        end: int,
        exclude: Optional[Iterable[int]] = None,
        predicate: Predicate = None,
        count: int = 1,
        consecutive: bool = False,
    ) -> List[int]:
        """
        Probes start..end in ascending order, one port at a time.

        In consecutive mode any skipped or busy port breaks the current run,
        and the result is either a full block of `count` adjacent ports or empty.
        Returns a short result when the range runs out.
        """
        validate_port_range(start, end)
        validate_count(count)
        excluded = frozenset(exclude or ())

        logger.debug("Sequential scan %s-%s on %s (count=%d, consecutive=%s)",
                     start, end, self.host, count, consecutive)

        found: List[int] = []
        run_start = 0
        run_length = 0

        for port in range(start, end + 1):
            if port in excluded:
                run_length = 0
                continue
            if predicate is not None and not predicate(port):
                run_length = 0
                continue

            if not await self.check(port):
                run_length = 0
                continue

            if not consecutive:
                found.append(port)
                if len(found) == count:
                    break
                continue

            if run_length == 0:
                run_start = port
            run_length += 1
            if run_length == count:
                found = list(range(run_start, run_start + count))
                logger.debug("Found consecutive block %s-%s", run_start, found[-1])
                break

        if len(found) < count:
            logger.debug("Range %s-%s exhausted with %d/%d ports", start, end, len(found), count)
        return found

    def _candidates(self, start: int, end: int, excluded: frozenset, predicate: Predicate) -> List[int]:
        # pure filter pass, the predicate sees every in-range port exactly once
        return [
            port for port in range(start, end + 1)
            if port not in excluded and (predicate is None or predicate(port))
        ]

    async def scan_parallel(
        self,
        start: int,
        end: int,
        exclude: Optional[Iterable[int]] = None,
        predicate: Predicate = None,
        count: int = 1,
        max_concurrency: Optional[int] = None,
    ) -> List[int]:
        """
        Probes the filtered candidates in windows of `max_concurrency`.

        Each window runs to completion before the next starts, so at most
        `max_concurrency` probes are in flight. Results keep candidate order;
        extra hits from the last window beyond `count` are dropped.
        """
        validate_port_range(start, end)
        validate_count(count)
        window = self.concurrency if max_concurrency is None else max_concurrency
        validate_concurrency(window)

        candidates = self._candidates(start, end, frozenset(exclude or ()), predicate)
        logger.debug("Parallel scan %s-%s on %s: %d candidates, window %d",
                     start, end, self.host, len(candidates), window)

        found: List[int] = []
        for offset in range(0, len(candidates), window):
            if len(found) >= count:
                break
            batch = candidates[offset:offset + window]
            results = await asyncio.gather(*(self.check(port) for port in batch))

            for port, available in zip(batch, results):
                if available and len(found) < count:
                    found.append(port)
            logger.debug("Window %d-%d done, %d/%d found", batch[0], batch[-1], len(found), count)

        return found


async def scan_ports(
    start: int,
    end: int,
    host: str = DEFAULT_HOST,
    exclude: Optional[Iterable[int]] = None,
    predicate: Predicate = None,
    count: int = 1,
    consecutive: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[int]:
    scanner = PortScanner(host=host, timeout=timeout)
    return await scanner.scan_sequential(start, end, exclude, predicate, count, consecutive)


async def scan_ports_parallel(
    start: int,
    end: int,
    host: str = DEFAULT_HOST,
    exclude: Optional[Iterable[int]] = None,
    predicate: Predicate = None,
    count: int = 1,
    max_concurrency: int = DEFAULT_CONCURRENCY,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[int]:
    scanner = PortScanner(host=host, timeout=timeout, concurrency=max_concurrency)
    return await scanner.scan_parallel(start, end, exclude, predicate, count)
