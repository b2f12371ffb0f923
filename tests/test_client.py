import dataclasses
import json
import time

import pytest
import requests

from bankly_sdk import (
    BanklyHTTPClient,
    DomainError,
    LoginError,
    RequestCancelled,
    catalog,
    new_session,
)
from bankly_sdk.handlers import default_error_handler


class _StaticToken:
    def __init__(self, token="Bearer static", delay=0):
        self.value = token
        self.delay = delay
        self.calls = 0

    def token(self, timeout=None, request_id=None):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.value


def _fail_handler(response, request_id=None):
    pytest.fail("error handler must not run for this status")


@dataclasses.dataclass
class _Payload:
    status: str


@pytest.fixture
def client(session, http):
    return BanklyHTTPClient(session, http=http)


@pytest.mark.parametrize("api_endpoint", ["https://api.example.com/v2/", "https://api.example.com/v2"])
@pytest.mark.parametrize("path", ["cards/document/123", "/cards/document/123", "cards/document/123/"])
def test_endpoint_joins_without_duplicated_slashes(api_endpoint, path):
    session = new_session(client_id="id", client_secret="secret", api_endpoint=api_endpoint)
    client = BanklyHTTPClient(session, authentication=_StaticToken())

    assert client.endpoint(path) == "https://api.example.com/v2/cards/document/123"


def test_endpoint_appends_query_parameters(client):
    url = client.endpoint("/events", {"page": 1, "pageSize": 20, "cursor": None})

    assert url == "https://api.test/events?page=1&pageSize=20"


def test_new_request_sets_standard_headers(session, http):
    client = BanklyHTTPClient(session, authentication=_StaticToken("Bearer abc"), http=http)

    request = client.new_request("POST", "/endpoint/resource", _Payload("ok"), request_id="req-1")

    assert request.url == "https://api.test/endpoint/resource"
    assert request.headers["Authorization"] == "Bearer abc"
    assert request.headers["api-version"] == "1.0"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["x-correlation-id"] == "req-1"
    assert json.loads(request.body) == {"status": "ok"}


def test_new_request_without_body_has_no_content_type(session, http):
    client = BanklyHTTPClient(session, authentication=_StaticToken(), http=http)

    request = client.new_request("GET", "balance")

    assert "Content-Type" not in request.headers
    assert request.body is None
    assert request.headers["x-correlation-id"]


def test_caller_headers_take_precedence(session, http):
    client = BanklyHTTPClient(session, authentication=_StaticToken(), http=http)

    request = client.new_request(
        "POST",
        "totp",
        {"a": 1},
        headers={"x-bkly-user-id": "12345678909", "api-version": "2.0"},
    )

    assert request.headers["x-bkly-user-id"] == "12345678909"
    assert request.headers["api-version"] == "2.0"
    assert request.headers["Authorization"] == "Bearer static"


def test_request_uses_token_provider_from_session(client, transport):
    client.get("balance")
    client.get("balance")

    assert transport.login_calls == 1
    for request in transport.api_requests:
        assert request.headers["Authorization"] == "Bearer token-1"


@pytest.mark.parametrize("status_code", [200, 201, 202, 204])
def test_success_status_returns_raw_response(client, transport, status_code):
    transport.api_response = (status_code, {"status": "ok"})

    response = client.post("/endpoint", {"status": "ok"})

    assert response.status_code == status_code
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize(
    "status_code, definition",
    [
        (404, catalog.ENTRY_NOT_FOUND),
        (403, catalog.SERVICE_FORBIDDEN),
        (504, catalog.GATEWAY_TIMEOUT),
    ],
)
def test_uniform_status_codes_take_precedence(client, transport, status_code, definition):
    transport.api_response = (
        status_code,
        {"errors": [{"code": "INVALID_PARAMETER", "messages": ["length of 'email'"]}]},
    )
    client.set_error_handler(_fail_handler)

    with pytest.raises(DomainError) as excinfo:
        client.get("cards/document/123")

    assert excinfo.value.matches(definition)
    assert excinfo.value.http_status == status_code


def test_other_status_is_delegated_to_error_handler(session, http, transport):
    transport.api_response = (
        400,
        {"errors": [{"code": "INVALID_PARAMETER", "messages": ["Exceeded the length of 'register name'"]}]},
    )
    client = BanklyHTTPClient(session, http=http, error_handler=default_error_handler)

    with pytest.raises(DomainError) as excinfo:
        client.post("business", {"name": "x" * 200})

    assert excinfo.value.matches(catalog.INVALID_REGISTER_NAME_LENGTH)


def test_error_handler_receives_request_id(client, transport):
    transport.api_response = (422, {"code": "X"})
    received = []

    def handler(response, request_id=None):
        received.append((response.status_code, request_id))
        return DomainError("X", 422, ("x",))

    client.set_error_handler(handler)

    with pytest.raises(DomainError):
        client.patch("cards/123/status", {"status": "Blocked"}, request_id="req-42")

    assert received == [(422, "req-42")]


def test_without_handler_raw_body_becomes_generic_error(client, transport):
    transport.api_response = (500, "upstream exploded")

    with pytest.raises(DomainError) as excinfo:
        client.get("balance")

    assert excinfo.value.error_key == "DEFAULT_ERROR"
    assert excinfo.value.http_status == 500
    assert excinfo.value.messages == ("upstream exploded",)


def test_transport_errors_are_returned_unmodified(session, http, transport):
    failure = requests.ConnectionError("connection reset")
    transport.api_response = failure
    client = BanklyHTTPClient(session, authentication=_StaticToken(), http=http)

    with pytest.raises(requests.ConnectionError) as excinfo:
        client.get("balance")

    assert excinfo.value is failure


def test_login_errors_surface_from_request(client, transport):
    transport.login_response = (400, {"error": "invalid_client"})

    with pytest.raises(LoginError):
        client.get("balance")

    assert transport.api_requests == []


def test_shortcuts_use_expected_methods(client, transport):
    client.get("/endpoint", {"key": "value", "foo": "bar"})
    client.post("/endpoint", {"a": 1})
    client.put("/endpoint", {"a": 1})
    client.patch("/endpoint", {"a": 1}, {"q": "1"})
    client.delete("/endpoint")

    methods = [r.method for r in transport.api_requests]
    assert methods == ["GET", "POST", "PUT", "PATCH", "DELETE"]

    get, _, _, patch, _ = transport.api_requests
    assert get.url == "https://api.test/endpoint?key=value&foo=bar"
    assert get.body is None
    assert patch.url == "https://api.test/endpoint?q=1"


def test_request_passes_remaining_timeout_to_transport(session, http, transport):
    client = BanklyHTTPClient(session, authentication=_StaticToken(), http=http)

    client.get("balance", timeout=5)

    timeout = transport.timeouts[-1]
    assert 0 < timeout <= 5


def test_deadline_exceeded_before_dispatch_cancels_request(session, http, transport):
    client = BanklyHTTPClient(session, authentication=_StaticToken(delay=0.05), http=http)

    with pytest.raises(RequestCancelled):
        client.get("balance", timeout=0.01)

    assert transport.api_requests == []


def test_request_cancelled_is_a_transport_error():
    assert issubclass(RequestCancelled, requests.RequestException)
