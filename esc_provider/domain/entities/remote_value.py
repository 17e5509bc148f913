"""
Domain entities for property values returned by a Pulumi ESC environment.

ESC values are untyped JSON. RemoteValue.from_raw() classifies them into one of
four explicit cases so coercion can dispatch on the case instead of probing
the raw data repeatedly.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Any, Union

from esc_provider.domain.errors import UnsupportedValueError

ScalarType = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Scalar:
    value: ScalarType


@dataclass(frozen=True)
class NestedMap:
    members: dict[str, Any]


@dataclass(frozen=True)
class ListValue:
    items: list[Any]


@dataclass(frozen=True)
class WrappedScalar:
    """The ESC ``Value`` envelope: ``{"value": ..., "secret": bool, "trace": {...}}``."""

    payload: "RemoteValue"
    secret: bool = False
    unknown: bool = False


RemoteValue = Union[Scalar, NestedMap, ListValue, WrappedScalar]


def from_raw(raw: Any) -> RemoteValue:
    """Classify decoded JSON data into a RemoteValue.

    Raises:
        UnsupportedValueError: if *raw* is not JSON-shaped data.
    """
    if isinstance(raw, (Scalar, NestedMap, ListValue, WrappedScalar)):
        return raw
    if raw is None or isinstance(raw, (str, bool, int, float)):
        return Scalar(raw)
    if isinstance(raw, dict):
        return NestedMap(dict(raw))
    if isinstance(raw, (list, tuple)):
        return ListValue(list(raw))
    raise UnsupportedValueError(f"value of type {type(raw).__name__} is not supported")


def wrapped(envelope: dict[str, Any]) -> WrappedScalar:
    """Build a WrappedScalar from a decoded ESC ``Value`` object."""
    return WrappedScalar(
        payload=from_raw(envelope["value"]),
        secret=bool(envelope.get("secret", False)),
        unknown=bool(envelope.get("unknown", False)),
    )
