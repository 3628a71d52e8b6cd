from typing import List

from .checks import validate_port, validate_port_range
from .errors import PortFinderError

def _to_int(token: str, whole: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise PortFinderError(
            f"Invalid port value: {whole!r}",
            PortFinderError.INVALID_PORT,
            {"port": whole},
        ) from None

def parse_ports(port_input: str) -> List[int]:
    """
    Parses a string of ports (spaces, commas, ranges) into a sorted list of integers.
    Example: "80 443 1000-1003" -> [80, 443, 1000, 1001, 1002, 1003]

    Unlike a lenient scanner target list, malformed or out-of-range tokens
    raise PortFinderError instead of being dropped.
    """
    ports = set()
    # Replace commas with spaces to handle both formats
    tokens = port_input.replace(',', ' ').split()

    for token in tokens:
        if '-' in token[1:]:
            low, _, high = token.partition('-')
            start, end = _to_int(low, token), _to_int(high, token)
            validate_port_range(start, end)
            ports.update(range(start, end + 1))
        else:
            port = _to_int(token, token)
            validate_port(port)
            ports.add(port)
    return sorted(ports)
