import argparse
import asyncio
import sys

from pydantic import ValidationError

from .config import ScanConfig
from .errors import PortFinderError
from .finder import DEFAULT_END_PORT, DEFAULT_START_PORT, find_port, find_ports, is_port_available
from .probe import DEFAULT_HOST, DEFAULT_TIMEOUT
from .scanner import DEFAULT_CONCURRENCY
from .ui import FinderUI, configure_logging
from .utils import parse_ports

EPILOG = """\
Examples:
  port-finder                                        Find a single available port
  port-finder --start 8000 --count 3 --consecutive   Find 3 consecutive ports from 8000
  port-finder --check 3000                           Check if port 3000 is available
  port-finder --validators common-ports,privileged   Skip well-known and privileged ports
  port-finder --count 5 --json                       JSON output
"""

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="port-finder",
        description="Find available network ports",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-s", "--start", type=int, default=DEFAULT_START_PORT, help=f"Starting port (default: {DEFAULT_START_PORT})")
    parser.add_argument("-e", "--end", type=int, default=DEFAULT_END_PORT, help=f"Ending port (default: {DEFAULT_END_PORT})")
    parser.add_argument("-x", "--exclude", default="", help="Ports to exclude (e.g. 3000,3001,4000-4010)")
    parser.add_argument("-H", "--host", default=DEFAULT_HOST, help=f"Host to bind (default: {DEFAULT_HOST})")
    parser.add_argument("-c", "--count", type=int, default=1, help="Number of ports to find (default: 1)")
    parser.add_argument("--consecutive", action="store_true", help="Find consecutive ports")
    parser.add_argument("-v", "--validators", type=lambda s: s.split(","), default=[], help="Comma-separated list of validators")
    parser.add_argument("--check", type=int, metavar="PORT", help="Check if a specific port is available")
    parser.add_argument("-j", "--json", action="store_true", help="Output in JSON format")
    parser.add_argument("--concurrency", type=int, default=DEFAULT_CONCURRENCY, help=f"Ports probed at once (Default: {DEFAULT_CONCURRENCY})")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help=f"Seconds before a probe counts as unavailable (Default: {DEFAULT_TIMEOUT})")
    parser.add_argument("--verbose", action="store_true", help="Log scan progress to stderr")
    return parser

async def run(config: ScanConfig, ui: FinderUI) -> int:
    if config.check is not None:
        available = await is_port_available(config.check, config.host, config.timeout)
        ui.show_check(config.check, available)
        return 0 if available else 1

    options = dict(
        start=config.start,
        end=config.end,
        exclude=config.exclude,
        host=config.host,
        validators=config.validators,
        max_concurrency=config.concurrency,
        timeout=config.timeout,
    )
    if config.count == 1:
        ui.show_port(await find_port(**options))
    else:
        ui.show_ports(await find_ports(config.count, consecutive=config.consecutive, **options))
    return 0

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    ui = FinderUI(json_output=args.json)
    configure_logging(args.verbose)

    try:
        # Validate with Pydantic
        config = ScanConfig(
            host=args.host,
            start=args.start,
            end=args.end,
            exclude=parse_ports(args.exclude),
            count=args.count,
            consecutive=args.consecutive,
            validators=args.validators,
            concurrency=args.concurrency,
            timeout=args.timeout,
            check=args.check,
            json_output=args.json,
        )
        return asyncio.run(run(config, ui))

    except PortFinderError as e:
        ui.show_error(e.message, e.code, e.details)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        ui.show_error(f"Invalid {field}: {first['msg']}", PortFinderError.INVALID_CONFIG, {"field": field})
    except KeyboardInterrupt:
        ui.show_error("Interrupted by user.")
    except Exception as e:
        ui.show_error(str(e))
    return 1

if __name__ == "__main__":
    sys.exit(main())
