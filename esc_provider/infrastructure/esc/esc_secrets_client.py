"""
Infrastructure adapter: Pulumi ESC environment → ISecretsClient.

All contract semantics for the ESC backend live here; HTTP details are confined
to IEnvironmentApi implementations (e.g. EscHttpApi). The client holds only the
immutable environment reference and the API handle, so one instance can serve
many requests.

push_secret() is a read-merge-write cycle with no concurrency guard: two pushes
to the same environment can interleave, and the later update wins with the
snapshot it read. Callers must serialize pushes if that is unacceptable.
"""

import json
import logging
from typing import Any

from esc_provider.application.services.nested_merge import SEPARATOR, merge_maps, split_key
from esc_provider.application.services.value_coercion import (
    to_bytes,
    to_plain,
    unwrap_envelope,
    unwrap_one_layer,
)
from esc_provider.domain.entities.environment import EnvironmentReference
from esc_provider.domain.entities.remote_value import NestedMap, RemoteValue
from esc_provider.domain.entities.secret_refs import (
    ExternalSecretDataRemoteRef,
    ExternalSecretFind,
    KubernetesSecret,
    PushSecretData,
    PushSecretRemoteRef,
    ValidationResult,
)
from esc_provider.domain.errors import (
    EnvironmentReadError,
    PushSecretError,
    SecretNotFoundError,
    SecretShapeError,
    SecretValueError,
    UnsupportedOperationError,
)
from esc_provider.domain.ports.environment_api_port import IEnvironmentApi
from esc_provider.domain.ports.secrets_client_port import ISecretsClient

logger = logging.getLogger(__name__)

ERR_SECRET_EXISTS_NOT_SUPPORTED = "checking secret existence is currently not supported by Pulumi"
ERR_DELETE_NOT_SUPPORTED = "deleting secrets is currently not supported by Pulumi"
ERR_GET_ALL_NOT_SUPPORTED = "getting all secrets is currently not supported by Pulumi"
ERR_READ_ENVIRONMENT = "error reading environment"
ERR_PUSH_SECRET = "error pushing secret"
ERR_NOT_A_MAP = "value of property {key!r} is not a map"


class EscSecretsClient(ISecretsClient):
    """Reads and pushes secrets held in one Pulumi ESC environment."""

    def __init__(self, api: IEnvironmentApi, environment: EnvironmentReference) -> None:
        self._api = api
        self._environment = environment

    @property
    def environment(self) -> EnvironmentReference:
        return self._environment

    def get_secret(self, ref: ExternalSecretDataRemoteRef) -> bytes:
        """Return the bytes of property *ref.key*.

        When *ref.property* is set, the dotted path it names is resolved inside
        the property's value first.

        Raises:
            SecretNotFoundError: if *ref.property* does not resolve.
            UnsupportedValueError: if the value has no byte conversion.
            Any exception propagated from the IEnvironmentApi.
        """
        value = self._read_property(ref.key)
        if ref.property:
            return to_bytes(_resolve_path(to_plain(value), ref))
        return to_bytes(value)

    def get_secret_map(self, ref: ExternalSecretDataRemoteRef) -> dict[str, bytes]:
        """Return the members of map-valued property *ref.key* as secret bytes.

        Each member arrives as an ESC ``Value`` envelope; it is re-encoded,
        unwrapped one layer and coerced. A single failing member aborts the
        whole call.

        Raises:
            SecretShapeError: if the property value is not a map.
            SecretValueError: naming the first member that fails to convert.
            Any exception propagated from the IEnvironmentApi.
        """
        value = self._read_property(ref.key)
        if not isinstance(value, NestedMap):
            raise SecretShapeError(ERR_NOT_A_MAP.format(key=ref.key))

        secret_data: dict[str, bytes] = {}
        for key, member in value.members.items():
            try:
                encoded = json.dumps(member).encode("utf-8")
                secret_data[key] = to_bytes(unwrap_one_layer(encoded))
            except (TypeError, ValueError) as exc:
                raise SecretValueError(key, exc) from exc
        return secret_data

    def get_all_secrets(self, find: ExternalSecretFind) -> dict[str, bytes]:
        raise UnsupportedOperationError(ERR_GET_ALL_NOT_SUPPORTED)

    def push_secret(self, secret: KubernetesSecret, data: PushSecretData) -> None:
        """Merge one key of *secret* into the environment document.

        Raises:
            SecretNotFoundError: if *secret* has no *data.secret_key*.
            EnvironmentReadError: if the current document cannot be read.
            PushSecretError: if the update call fails.
        """
        if data.secret_key not in secret.data:
            raise SecretNotFoundError(
                f"secret {secret.namespace}/{secret.name} has no key {data.secret_key!r}"
            )
        try:
            value = secret.data[data.secret_key].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SecretShapeError(f"value of key {data.secret_key!r} is not valid UTF-8") from exc

        remote_key = data.remote_key
        if data.property:
            remote_key = f"{remote_key}{SEPARATOR}{data.property}"

        org, env = self._environment.organization, self._environment.environment
        try:
            current = self._api.open_and_read_environment(org, env)
        except Exception as exc:
            raise EnvironmentReadError(f"{ERR_READ_ENVIRONMENT}: {exc}") from exc

        merged = merge_maps(current, {remote_key: value})
        logger.debug("Pushing key %r to environment %s", remote_key, self._environment)
        try:
            self._api.update_environment(org, env, {"values": merged})
        except Exception as exc:
            raise PushSecretError(f"{ERR_PUSH_SECRET}: {exc}") from exc

    def secret_exists(self, ref: PushSecretRemoteRef) -> bool:
        raise UnsupportedOperationError(ERR_SECRET_EXISTS_NOT_SUPPORTED)

    def delete_secret(self, ref: PushSecretRemoteRef) -> None:
        raise UnsupportedOperationError(ERR_DELETE_NOT_SUPPORTED)

    def validate(self) -> ValidationResult:
        return ValidationResult.READY

    def close(self) -> None:
        pass

    def _read_property(self, key: str) -> RemoteValue:
        org, env = self._environment.organization, self._environment.environment
        open_id = self._api.open_environment(org, env)
        logger.debug("Reading property %r from environment %s", key, self._environment)
        envelope = self._api.read_environment_property(org, env, open_id, key)
        return unwrap_envelope(envelope)


def _resolve_path(data: Any, ref: ExternalSecretDataRemoteRef) -> Any:
    node = data
    for segment in split_key(ref.property):
        if not isinstance(node, dict) or segment not in node:
            raise SecretNotFoundError(f"property {ref.property!r} not found in key {ref.key!r}")
        node = node[segment]
    return node
