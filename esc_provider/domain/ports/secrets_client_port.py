"""
Port (interface) for the secrets-backend contract the controller calls.
Infrastructure adapters (e.g. EscSecretsClient) must implement this interface.
"""

from abc import ABC, abstractmethod

from esc_provider.domain.entities.secret_refs import (
    ExternalSecretDataRemoteRef,
    ExternalSecretFind,
    KubernetesSecret,
    PushSecretData,
    PushSecretRemoteRef,
    ValidationResult,
)


class ISecretsClient(ABC):
    @abstractmethod
    def get_secret(self, ref: ExternalSecretDataRemoteRef) -> bytes:
        """Return the payload of a single remote secret."""
        ...

    @abstractmethod
    def get_secret_map(self, ref: ExternalSecretDataRemoteRef) -> dict[str, bytes]:
        """Return a map-valued remote secret as a flat key → bytes dict."""
        ...

    @abstractmethod
    def get_all_secrets(self, find: ExternalSecretFind) -> dict[str, bytes]:
        """Return every secret matching *find*."""
        ...

    @abstractmethod
    def push_secret(self, secret: KubernetesSecret, data: PushSecretData) -> None:
        """Write one key of *secret* to the remote backend."""
        ...

    @abstractmethod
    def secret_exists(self, ref: PushSecretRemoteRef) -> bool:
        ...

    @abstractmethod
    def delete_secret(self, ref: PushSecretRemoteRef) -> None:
        ...

    @abstractmethod
    def validate(self) -> ValidationResult:
        """Report whether the backend is ready to serve requests."""
        ...

    @abstractmethod
    def close(self) -> None:
        ...
