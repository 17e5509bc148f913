"""
Composition Root for the ESC secrets provider.

The controller calls new_client() once per secret store configuration and
reuses the returned client across reconciliations. validate_store() mirrors the
controller's store validation hook: it reports configuration problems without
touching the network.

Usage:
    from esc_provider.infrastructure.entrypoints.provider import new_client

    client = new_client()  # reads PULUMI_* env vars (and .env)
    token = client.get_secret(ExternalSecretDataRemoteRef(key="github.token"))
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from esc_provider.infrastructure.config.store_config import EscStoreConfig
from esc_provider.infrastructure.esc.esc_http_api import EscHttpApi
from esc_provider.infrastructure.esc.esc_secrets_client import EscSecretsClient

logger = logging.getLogger(__name__)


def new_client(config: Optional[EscStoreConfig] = None, **api_options: Any) -> EscSecretsClient:
    """Wire config → EscHttpApi → EscSecretsClient.

    The returned client keeps its HTTP connection pool for the life of the
    process; EscSecretsClient.close() does not release it. Use client_session()
    when the client should not outlive a block of work.

    Args:
        config:      Store configuration; read from the environment when omitted.
        api_options: Extra keyword arguments for EscHttpApi (e.g. ``transport``).
    """
    config = config or EscStoreConfig.from_env()
    return EscSecretsClient(_new_api(config, **api_options), config.environment_reference)


@contextmanager
def client_session(
    config: Optional[EscStoreConfig] = None, **api_options: Any
) -> Iterator[EscSecretsClient]:
    """Yield a client whose HTTP connection pool is closed on exit."""
    config = config or EscStoreConfig.from_env()
    with _new_api(config, **api_options) as api:
        yield EscSecretsClient(api, config.environment_reference)


def _new_api(config: EscStoreConfig, **api_options: Any) -> EscHttpApi:
    logger.info(
        "Creating ESC API client for %s/%s at %s",
        config.organization,
        config.environment,
        config.api_url,
    )
    return EscHttpApi(
        access_token=config.access_token.get_secret_value(),
        api_url=config.api_url,
        timeout=config.timeout,
        **api_options,
    )


def validate_store(settings: dict[str, Any]) -> list[str]:
    """Return the validation errors of a raw store configuration (empty if valid)."""
    try:
        EscStoreConfig(**settings)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
    return []
