"""
Built-in acceptance predicates.

Each predicate takes a port and returns True when the port is acceptable.
"""
from typing import Callable, Dict, FrozenSet

PortValidator = Callable[[int], bool]

# Well-known service and development ports a freshly picked port should avoid:
# infrastructure (ftp, ssh, dns, mail, ldap, smb), databases (mssql, oracle,
# mysql, postgres, redis, mongodb, elasticsearch), brokers and caches
# (zookeeper, memcached, rabbitmq), remote desktop (rdp, vnc), and the usual
# dev-server ranges (3000-3001, 4000-4009, 5000-5001, 8000-8099, 10000-10005).
COMMON_PORTS: FrozenSet[int] = frozenset({
    20, 21, 22, 23, 25, 53, 67, 68, 69, 80, 110, 119, 123, 143, 161, 162,
    179, 194, 389, 443, 445, 465, 514, 515, 587, 636, 873, 902, 989, 990,
    993, 995, 1080, 1194, 1433, 1434, 1521, 1723, 2049, 2082, 2083, 2086,
    2087, 2095, 2096, 2181, 3000, 3001, 3128, 3306, 3389, 3690, 4000, 4001,
    4002, 4003, 4004, 4005, 4006, 4007, 4008, 4009, 5000, 5001, 5060, 5061,
    5432, 5900, 5984, 5985, 6379, 6666, 6667, 6668, 6669, 7000, 7001, 7002,
    8000, 8001, 8008, 8009, 8080, 8081, 8082, 8083, 8084, 8085, 8086, 8087,
    8088, 8089, 8090, 8091, 8092, 8093, 8094, 8095, 8096, 8097, 8098, 8099,
    8443, 8444, 8880, 8888, 9000, 9001, 9090, 9091, 9200, 9300, 9418, 9999,
    10000, 10001, 10002, 10003, 10004, 10005, 11211, 15672, 25565, 25575,
    27017, 27018, 27019, 28017, 33848, 35357,
})

PRIVILEGED_PORT_LIMIT = 1024


def reject_common_ports(port: int) -> bool:
    return port not in COMMON_PORTS


def reject_privileged(port: int) -> bool:
    """Ports below 1024 need elevated rights to bind on most systems."""
    return port >= PRIVILEGED_PORT_LIMIT


BUILTIN_VALIDATORS: Dict[str, PortValidator] = {
    "common-ports": reject_common_ports,
    "privileged": reject_privileged,
}
