import datetime
import json

import pytest
import requests
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from requests.adapters import BaseAdapter

from bankly_sdk import new_session

LOGIN_ENDPOINT = "https://login.test"
API_ENDPOINT = "https://api.test/"

TOKEN_PAYLOAD = {"access_token": "token-1", "expires_in": 3600, "token_type": "Bearer"}


def build_response(request, status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response.request = request
    response.url = request.url
    response.encoding = "utf-8"
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class FakeTransport(BaseAdapter):
    """Responde o login e a API com respostas prontas e conta as chamadas."""

    def __init__(self):
        super().__init__()
        self.login_response = (200, TOKEN_PAYLOAD)
        self.api_response = (200, {"status": "ok"})
        self.login_calls = 0
        self.requests = []
        self.timeouts = []

    @property
    def api_requests(self):
        return [r for r in self.requests if not r.url.startswith(LOGIN_ENDPOINT)]

    def send(self, request, timeout=None, **kwargs):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if request.url.startswith(LOGIN_ENDPOINT):
            self.login_calls += 1
            result = self.login_response
        else:
            result = self.api_response
        if isinstance(result, BaseException):
            raise result
        if callable(result):
            result = result(request)
        return build_response(request, *result)

    def close(self):
        pass


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def http(transport):
    session = requests.Session()
    session.mount("https://", transport)
    return session


@pytest.fixture
def session():
    return new_session(
        client_id="client-id",
        client_secret="client-secret",
        login_endpoint=LOGIN_ENDPOINT,
        api_endpoint=API_ENDPOINT,
        api_version="1.0",
    )


@pytest.fixture
def certificate_pem():
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "bankly-test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(minutes=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    key_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return cert_pem, key_pem
