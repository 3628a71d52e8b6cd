from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..errors import PortFinderError
from .builtin import BUILTIN_VALIDATORS, PortValidator


@dataclass
class Resolution:
    """Outcome of resolving validator names: a predicate or a failure reason."""
    predicate: Optional[PortValidator] = None
    error: str = ""
    unknown: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    def unwrap(self) -> Optional[PortValidator]:
        """Returns the predicate, raising UNKNOWN_VALIDATOR if resolution failed."""
        if not self.ok:
            raise PortFinderError(self.error, PortFinderError.UNKNOWN_VALIDATOR, {"name": self.unknown})
        return self.predicate


def compose(validators: List[PortValidator]) -> PortValidator:
    """
    AND-composition, evaluated left to right.
    The first validator that rejects a port stops evaluation.
    """
    def predicate(port: int) -> bool:
        return all(validate(port) for validate in validators)
    return predicate


class ValidatorRegistry:
    """
    Maps validator names to predicates.

    Custom validators shadow built-ins of the same name. Registries are plain
    objects; create one per caller (or per test) and pass it to the finder.
    """

    def __init__(self, builtins: Optional[Dict[str, PortValidator]] = None):
        self._builtins = dict(BUILTIN_VALIDATORS if builtins is None else builtins)
        self._custom: Dict[str, PortValidator] = {}

    @staticmethod
    def _check_name(name) -> None:
        if not isinstance(name, str) or not name:
            raise PortFinderError(
                "Validator name must be a non-empty string",
                PortFinderError.INVALID_VALIDATOR,
                {"name": name},
            )

    def add(self, name: str, validate: PortValidator) -> None:
        self._check_name(name)
        if not callable(validate):
            raise PortFinderError(
                "Validator must be callable",
                PortFinderError.INVALID_VALIDATOR,
                {"name": name},
            )
        self._custom[name] = validate

    def remove(self, name: str) -> None:
        self._check_name(name)
        self._custom.pop(name, None)

    def get(self, name: str) -> Optional[PortValidator]:
        if name in self._custom:
            return self._custom[name]
        return self._builtins.get(name)

    def names(self) -> List[str]:
        return sorted(set(self._builtins) | set(self._custom))

    def __contains__(self, name) -> bool:
        return self.get(name) is not None

    def resolve(self, names: Iterable[str]) -> Resolution:
        """
        Resolves every name up front. Fails on the first unknown name so a
        doomed configuration never reaches the scanner.
        """
        if isinstance(names, str):
            names = [names]
        resolved = []
        for name in names:
            validate = self.get(name)
            if validate is None:
                return Resolution(error=f"Unknown validator: {name}", unknown=name)
            resolved.append(validate)

        if not resolved:
            return Resolution()
        return Resolution(predicate=compose(resolved))

    def apply(self, port: int, names: Iterable[str]) -> bool:
        predicate = self.resolve(names).unwrap()
        return predicate is None or predicate(port)
