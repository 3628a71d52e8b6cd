from .builtin import BUILTIN_VALIDATORS, COMMON_PORTS, PortValidator, reject_common_ports, reject_privileged
from .registry import Resolution, ValidatorRegistry, compose
