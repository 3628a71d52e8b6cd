"""
portfinder - find free TCP ports by binding them.

    import asyncio
    from portfinder import find_port, find_ports

    port = asyncio.run(find_port(start=8000))
    block = asyncio.run(find_ports(3, start=8000, consecutive=True))
"""
from .checks import validate_count, validate_port, validate_port_range
from .errors import PortFinderError
from .finder import find_port, find_ports, is_port_available
from .probe import check_port
from .scanner import PortScanner, scan_ports, scan_ports_parallel
from .validators import BUILTIN_VALIDATORS, COMMON_PORTS, ValidatorRegistry

__version__ = "1.0.0"
