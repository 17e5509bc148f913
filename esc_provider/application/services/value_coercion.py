"""
Application service: convert ESC property values into secret bytes.

to_bytes() is the single point every value passes through before it leaves the
provider as secret content. unwrap_one_layer() decodes the JSON form of an ESC
``Value`` envelope, which is how members of a map-valued property arrive.
Depends only on Domain entities and errors.
"""

import json
from decimal import Decimal
from typing import Any

from esc_provider.domain.entities.remote_value import (
    ListValue,
    NestedMap,
    RemoteValue,
    Scalar,
    WrappedScalar,
    wrapped,
)
from esc_provider.domain.errors import UnsupportedValueError, ValueDecodeError


def to_bytes(value: Any) -> bytes:
    """Convert a RemoteValue (or plain JSON data) to its byte representation.

    Maps and lists held by a RemoteValue still carry ESC envelopes on their
    members and are unwrapped before encoding; plain dicts and lists are
    encoded as they are.

    Raises:
        UnsupportedValueError: if no conversion is defined for *value*.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, WrappedScalar):
        return to_bytes(value.payload)
    if isinstance(value, Scalar):
        return _scalar_bytes(value.value)
    if isinstance(value, (NestedMap, ListValue)):
        return _json_bytes(to_plain(value))
    if isinstance(value, (dict, list)):
        return _json_bytes(value)
    return _scalar_bytes(value)


def unwrap_one_layer(data: bytes) -> RemoteValue:
    """Decode *data* as an ESC ``Value`` object and return its payload.

    Raises:
        ValueDecodeError: if *data* is not JSON or not a ``Value`` object.
    """
    try:
        decoded = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueDecodeError(f"invalid value encoding: {exc}") from exc
    return unwrap_envelope(decoded)


def unwrap_envelope(envelope: Any) -> RemoteValue:
    """Return the payload of a decoded ESC ``Value`` object."""
    if not isinstance(envelope, dict) or "value" not in envelope:
        raise ValueDecodeError("value object is missing required property 'value'")
    return wrapped(envelope).payload


def to_plain(value: RemoteValue) -> Any:
    """Return the plain JSON data of a RemoteValue, without ESC envelopes."""
    if isinstance(value, WrappedScalar):
        return to_plain(value.payload)
    if isinstance(value, Scalar):
        return value.value
    if isinstance(value, NestedMap):
        return {key: strip_envelopes(member) for key, member in value.members.items()}
    if isinstance(value, ListValue):
        return [strip_envelopes(item) for item in value.items]
    raise UnsupportedValueError(f"unknown remote value {value!r}")


def strip_envelopes(envelope: Any) -> Any:
    """Unwrap an ESC ``Value`` envelope and, level by level, every nested one.

    ESC wraps each member of an object and each item of an array in its own
    envelope, so payload maps are never inspected for envelope-like keys.

    Raises:
        ValueDecodeError: if *envelope* or a nested member is not a ``Value`` object.
    """
    return to_plain(unwrap_envelope(envelope))


def _scalar_bytes(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, int):
        return str(value).encode()
    if isinstance(value, float):
        # Shortest round-trip digits in plain decimal notation, never an exponent.
        text = format(Decimal(repr(value)), "f")
        if value.is_integer() and text.endswith(".0"):
            text = text[:-2]
        return text.encode()
    if isinstance(value, str):
        return value.encode("utf-8")
    raise UnsupportedValueError(f"value of type {type(value).__name__} is not supported")


def _json_bytes(value: Any) -> bytes:
    return json.dumps(
        value, separators=(",", ":"), sort_keys=True, ensure_ascii=False
    ).encode("utf-8")
