"""
Port (interface) for the Pulumi ESC environment API.
Infrastructure adapters (e.g. EscHttpApi) must implement this interface;
errors raised by implementations propagate to callers unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any


class IEnvironmentApi(ABC):
    @abstractmethod
    def open_environment(self, organization: str, environment: str) -> str:
        """Open the environment and return the open session id."""
        ...

    @abstractmethod
    def read_environment_property(
        self,
        organization: str,
        environment: str,
        open_id: str,
        property_key: str,
    ) -> Any:
        """Read one property of an opened environment.

        Returns the decoded ESC ``Value`` object, i.e. a dict with a ``"value"``
        member whose nested object members are themselves ``Value`` objects.
        """
        ...

    @abstractmethod
    def open_and_read_environment(self, organization: str, environment: str) -> dict[str, Any]:
        """Open the environment and return its full document as plain values."""
        ...

    @abstractmethod
    def update_environment(
        self,
        organization: str,
        environment: str,
        definition: dict[str, Any],
    ) -> None:
        """Replace the environment definition with *definition*."""
        ...
