"""
Exception hierarchy for the ESC secrets provider.

Shape and decode failures also derive from ValueError so callers that only
care about "bad data" can catch the builtin.
"""


class EscProviderError(Exception):
    """Base class for every error raised by this package."""


class UnsupportedOperationError(EscProviderError):
    """Raised by contract operations the ESC backend does not implement."""


class EnvironmentReadError(EscProviderError):
    """Reading the full environment document failed during a push."""


class PushSecretError(EscProviderError):
    """Updating the environment document failed during a push."""


class SecretNotFoundError(EscProviderError, KeyError):
    """A requested key or property path does not exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnsupportedValueError(EscProviderError, ValueError):
    """A value has no defined byte conversion."""


class ValueDecodeError(EscProviderError, ValueError):
    """Bytes could not be decoded as an ESC value object."""


class SecretShapeError(EscProviderError, ValueError):
    """A property value is not shaped as the operation requires."""


class SecretValueError(EscProviderError, ValueError):
    """A single member of a map-valued property could not be converted."""

    def __init__(self, key: str, reason: Exception) -> None:
        super().__init__(f"unable to get value for key {key}: {reason}")
        self.key = key
        self.reason = reason
