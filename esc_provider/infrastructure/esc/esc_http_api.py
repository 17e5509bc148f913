"""
Infrastructure adapter: Pulumi Cloud ESC REST API → IEnvironmentApi.

All httpx and wire-format details are confined here. Every request carries the
same authenticated client (token header, base URL, timeout); HTTP failures are
raised by raise_for_status() and propagate to callers unchanged.

Environment definitions are sent as YAML, which is what the PATCH endpoint
accepts.
"""

import logging
from typing import Any, Optional

import httpx
import yaml

from esc_provider.application.services.value_coercion import strip_envelopes
from esc_provider.domain.ports.environment_api_port import IEnvironmentApi

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.pulumi.com/api/esc"


class EscHttpApi(IEnvironmentApi):
    """Talks to the ESC environments endpoints with a shared httpx.Client."""

    def __init__(
        self,
        access_token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            access_token: Pulumi access token sent as ``Authorization: token ...``.
            api_url:      Base URL of the ESC API.
            timeout:      Per-request timeout in seconds.
            transport:    Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={
                "Authorization": f"token {access_token}",
                "Accept": "application/json",
                "User-Agent": "esc-provider",
            },
            timeout=timeout,
            transport=transport,
        )

    def open_environment(self, organization: str, environment: str) -> str:
        response = self._client.post(_environment_path(organization, environment) + "/open")
        response.raise_for_status()
        open_id = response.json()["id"]
        logger.debug("Opened environment %s/%s (session %s)", organization, environment, open_id)
        return open_id

    def read_environment_property(
        self,
        organization: str,
        environment: str,
        open_id: str,
        property_key: str,
    ) -> Any:
        response = self._client.get(
            f"{_environment_path(organization, environment)}/open/{open_id}",
            params={"property": property_key},
        )
        response.raise_for_status()
        return response.json()

    def open_and_read_environment(self, organization: str, environment: str) -> dict[str, Any]:
        open_id = self.open_environment(organization, environment)
        response = self._client.get(f"{_environment_path(organization, environment)}/open/{open_id}")
        response.raise_for_status()
        properties = response.json().get("properties") or {}
        return {key: strip_envelopes(value) for key, value in properties.items()}

    def update_environment(
        self,
        organization: str,
        environment: str,
        definition: dict[str, Any],
    ) -> None:
        body = yaml.safe_dump(definition, sort_keys=False, allow_unicode=True)
        response = self._client.patch(
            _environment_path(organization, environment),
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/x-yaml"},
        )
        response.raise_for_status()
        logger.debug("Updated environment %s/%s", organization, environment)

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> "EscHttpApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _environment_path(organization: str, environment: str) -> str:
    return f"/environments/{organization}/{environment}"
