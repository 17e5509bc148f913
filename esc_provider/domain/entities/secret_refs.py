"""
Domain entities for the secrets-backend contract exposed to the controller.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ValidationResult(Enum):
    READY = "Ready"
    UNKNOWN = "Unknown"
    ERROR = "Error"


@dataclass(frozen=True)
class ExternalSecretDataRemoteRef:
    key: str
    property: str = ""
    version: str = ""


@dataclass(frozen=True)
class ExternalSecretFind:
    name: Optional[str] = None
    path: Optional[str] = None
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PushSecretRemoteRef:
    remote_key: str
    property: str = ""


@dataclass(frozen=True)
class PushSecretData:
    secret_key: str
    remote_key: str
    property: str = ""


@dataclass(frozen=True)
class KubernetesSecret:
    name: str
    namespace: str
    data: dict[str, bytes] = field(default_factory=dict)
