"""
Shared fixtures for the ESC provider tests.

FakeEnvironmentApi stands in for the remote ESC API: it serves property reads
from ESC ``Value`` envelopes, keeps a plain-values document for read-all and
records every call so tests can assert on remote traffic.
"""

import copy
from typing import Any

import pytest

from esc_provider.domain.entities.environment import EnvironmentReference
from esc_provider.domain.ports.environment_api_port import IEnvironmentApi
from esc_provider.infrastructure.esc.esc_secrets_client import EscSecretsClient

TRACE = {"def": {"environment": "prod", "begin": {"line": 1}, "end": {"line": 1}}}


def envelope(value: Any, secret: bool = False) -> dict:
    """Wrap *value* the way ESC does, wrapping nested object members too."""
    if isinstance(value, dict):
        value = {key: envelope(item) for key, item in value.items()}
    result = {"value": value, "trace": TRACE}
    if secret:
        result["secret"] = True
    return result


class FakeEnvironmentApi(IEnvironmentApi):
    def __init__(self, properties=None, document=None) -> None:
        self.properties = properties or {}
        self.document = document or {}
        self.calls: list[tuple] = []
        self.updates: list[dict] = []
        self.read_error = None
        self.update_error = None

    def open_environment(self, organization, environment):
        self.calls.append(("open", organization, environment))
        return "open-123"

    def read_environment_property(self, organization, environment, open_id, property_key):
        self.calls.append(("read", organization, environment, open_id, property_key))
        if property_key not in self.properties:
            raise KeyError(property_key)
        return self.properties[property_key]

    def open_and_read_environment(self, organization, environment):
        self.calls.append(("read_all", organization, environment))
        if self.read_error:
            raise self.read_error
        return copy.deepcopy(self.document)

    def update_environment(self, organization, environment, definition):
        self.calls.append(("update", organization, environment))
        if self.update_error:
            raise self.update_error
        self.updates.append(definition)
        self.document = copy.deepcopy(definition["values"])


@pytest.fixture
def environment_ref():
    return EnvironmentReference("acme", "prod")


@pytest.fixture
def fake_api():
    return FakeEnvironmentApi()


@pytest.fixture
def client(fake_api, environment_ref):
    return EscSecretsClient(fake_api, environment_ref)
