"""Tests for EscHttpApi using httpx.MockTransport."""

import json

import httpx
import pytest
import yaml

from esc_provider.infrastructure.esc.esc_http_api import EscHttpApi

BASE = "https://api.example.test/api/esc"


class Recorder:
    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes[(request.method, request.url.path)]
        return handler(request)


def _api(routes) -> tuple[EscHttpApi, Recorder]:
    recorder = Recorder(routes)
    api = EscHttpApi("pul-token", api_url=BASE, transport=httpx.MockTransport(recorder))
    return api, recorder


def test_open_environment_posts_and_returns_session_id():
    api, recorder = _api({
        ("POST", "/api/esc/environments/acme/prod/open"): lambda r: httpx.Response(200, json={"id": "abc"}),
    })

    assert api.open_environment("acme", "prod") == "abc"
    assert recorder.requests[0].headers["Authorization"] == "token pul-token"


def test_read_environment_property_passes_property_query():
    value = {"value": "s3cr3t", "secret": True, "trace": {}}
    api, recorder = _api({
        ("GET", "/api/esc/environments/acme/prod/open/abc"): lambda r: httpx.Response(200, json=value),
    })

    assert api.read_environment_property("acme", "prod", "abc", "db.password") == value
    assert recorder.requests[0].url.params["property"] == "db.password"


def test_open_and_read_environment_strips_value_envelopes():
    properties = {
        "db": {"value": {"user": {"value": "admin", "trace": {}}}, "trace": {}},
        "region": {"value": "eu", "trace": {}},
        "api": {
            "value": {"value": {"value": "abc", "trace": {}}, "secret": {"value": "xyz", "trace": {}}},
            "trace": {},
        },
    }
    api, _ = _api({
        ("POST", "/api/esc/environments/acme/prod/open"): lambda r: httpx.Response(200, json={"id": "abc"}),
        ("GET", "/api/esc/environments/acme/prod/open/abc"): lambda r: httpx.Response(
            200, json={"properties": properties}
        ),
    })

    assert api.open_and_read_environment("acme", "prod") == {
        "db": {"user": "admin"},
        "region": "eu",
        "api": {"value": "abc", "secret": "xyz"},
    }


def test_update_environment_sends_yaml_definition():
    api, recorder = _api({
        ("PATCH", "/api/esc/environments/acme/prod"): lambda r: httpx.Response(200, json={}),
    })

    api.update_environment("acme", "prod", {"values": {"db": {"password": "new"}}})

    request = recorder.requests[0]
    assert request.headers["Content-Type"] == "application/x-yaml"
    assert yaml.safe_load(request.content) == {"values": {"db": {"password": "new"}}}


def test_http_errors_propagate_unchanged():
    api, _ = _api({
        ("POST", "/api/esc/environments/acme/prod/open"): lambda r: httpx.Response(
            404, content=json.dumps({"message": "not found"})
        ),
    })

    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        api.open_environment("acme", "prod")
    assert excinfo.value.response.status_code == 404


def test_close_releases_the_http_client():
    api, _ = _api({
        ("POST", "/api/esc/environments/acme/prod/open"): lambda r: httpx.Response(200, json={"id": "abc"}),
    })

    with api:
        assert api.open_environment("acme", "prod") == "abc"

    with pytest.raises(RuntimeError):
        api.open_environment("acme", "prod")
