"""
Immutable scan configuration for ZMap invocations.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Tuple

from netzap.config.options import ScanOption, ValueKind, canonical_key, infer_kind

_SCALAR_TYPES = (str, int, float, bool)


def _normalise_subnets(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if isinstance(value, (list, tuple)):
        return tuple(str(subnet) for subnet in value if str(subnet).strip())
    raise TypeError(f"subnet must be a string or a sequence of strings, got {type(value).__name__}")


def _normalise_value(key: str, value: Any) -> Any:
    """Check a value against its option kind and freeze sequences"""
    kind = infer_kind(key, value)

    if kind is ValueKind.POSITIONAL:
        return _normalise_subnets(value)

    if kind is ValueKind.LIST and isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)

    if kind is ValueKind.JSON and isinstance(value, Mapping):
        return dict(value)

    if not isinstance(value, _SCALAR_TYPES):
        raise TypeError(f"Unsupported value for option '{key}': {value!r}")

    return value


class ScanConfiguration(Mapping):
    """
    Ordered, read-only mapping of ZMap options.

    Keys are stored in snake_case; camelCase keys are accepted and
    normalised. Every change goes through merge(), which returns a new
    configuration and leaves the receiver untouched.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Optional[Mapping] = None, **options: Any):
        self._values: Dict[str, Any] = {}
        self._apply(values, options)

    def _apply(self, values: Optional[Mapping], options: Dict[str, Any]) -> None:
        updates = dict(values or {})
        updates.update(options)

        for raw_key, value in updates.items():
            key = canonical_key(raw_key)
            if value is None:
                self._values.pop(key, None)
                continue

            normalised = _normalise_value(key, value)
            if key == ScanOption.SUBNET.key and not normalised:
                self._values.pop(key, None)
                continue

            self._values[key] = normalised

    def merge(self, partial: Optional[Mapping] = None, **options: Any) -> 'ScanConfiguration':
        """
        Shallow-merge new options over this configuration

        Args:
            partial: Mapping of options to apply
            **options: Options given as keyword arguments (applied after partial)

        Returns:
            A new configuration; values from the right-hand side win
        """
        merged = ScanConfiguration.__new__(ScanConfiguration)
        merged._values = dict(self._values)
        merged._apply(partial, options)
        return merged

    def __getitem__(self, key: str) -> Any:
        return self._values[canonical_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ScanConfiguration({self._values!r})"

    @property
    def subnets(self) -> Tuple[str, ...]:
        return self._values.get(ScanOption.SUBNET.key, ())

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary copy of the configuration"""
        result = {}
        for key, value in self._values.items():
            result[key] = dict(value) if isinstance(value, dict) else value
        return result
