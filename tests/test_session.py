import dataclasses

import pytest

from bankly_sdk import (
    Certificate,
    ClientCredentialsMissing,
    InvalidCertificate,
    TokenCache,
    new_session,
)
from bankly_sdk.session import DEFAULT_TIMEOUT


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("BANKLY_CLIENT_ID", raising=False)
    monkeypatch.delenv("BANKLY_CLIENT_SECRET", raising=False)


def test_new_session_applies_sandbox_defaults():
    session = new_session(client_id="id", client_secret="secret")

    assert session.api_endpoint == "https://api.sandbox.bankly.com.br"
    assert session.login_endpoint == "https://login.sandbox.bankly.com.br"
    assert session.api_version == "1.0"
    assert session.scopes == ""
    assert session.timeout == DEFAULT_TIMEOUT
    assert isinstance(session.token_cache, TokenCache)
    assert session.token_cache.default_expiration == 600
    assert session.mtls is False


def test_new_session_keeps_explicit_values():
    cache = TokenCache(60)
    session = new_session(
        client_id="id",
        client_secret="secret",
        login_endpoint="https://login.bankly.com.br",
        api_endpoint="https://api.bankly.com.br",
        api_version="2.0",
        cache=cache,
        scopes="card.read pix.write",
    )

    assert session.login_endpoint == "https://login.bankly.com.br"
    assert session.api_endpoint == "https://api.bankly.com.br"
    assert session.api_version == "2.0"
    assert session.token_cache is cache
    assert session.scopes == "card.read pix.write"


def test_new_session_reads_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("BANKLY_CLIENT_ID", "env-id")
    monkeypatch.setenv("BANKLY_CLIENT_SECRET", "env-secret")

    session = new_session()

    assert session.client_id == "env-id"
    assert session.client_secret == "env-secret"


@pytest.mark.parametrize(
    "client_id, client_secret",
    [(None, "secret"), ("id", None), ("", "secret"), ("id", ""), (None, None)],
)
def test_new_session_fails_without_credentials(client_id, client_secret):
    with pytest.raises(ClientCredentialsMissing):
        new_session(client_id=client_id, client_secret=client_secret)


def test_session_is_immutable():
    session = new_session(client_id="id", client_secret="secret")

    with pytest.raises(dataclasses.FrozenInstanceError):
        session.api_version = "2.0"


def test_session_repr_hides_credentials():
    session = new_session(client_id="my-client-id", client_secret="my-secret")

    assert "my-secret" not in repr(session)
    assert "my-client-id" not in repr(session)


def test_certificate_client_id_replaces_configured_one(certificate_pem):
    cert_pem, key_pem = certificate_pem
    certificate = Certificate(cert_pem, key_pem, client_id="mtls-client")

    session = new_session(client_id="id", client_secret="secret", certificate=certificate)

    assert session.client_id == "mtls-client"
    assert session.mtls is True
    assert certificate.subject_dn == "CN=bankly-test"


def test_certificate_accepts_text_pem(certificate_pem):
    cert_pem, key_pem = certificate_pem
    certificate = Certificate(cert_pem.decode(), key_pem.decode())

    assert isinstance(certificate.certificate, bytes)
    assert isinstance(certificate.private_key, bytes)


def test_invalid_certificate_fails_at_construction():
    certificate = Certificate(b"not a certificate", b"not a key")

    with pytest.raises(InvalidCertificate):
        new_session(client_id="id", client_secret="secret", certificate=certificate)
