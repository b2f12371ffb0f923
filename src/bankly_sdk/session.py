import logging
import os
from dataclasses import dataclass, field
from typing import Union

from cryptography import x509
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization

from .cache import TokenCache
from .error import ClientCredentialsMissing, InvalidCertificate
from .utils import mask_sensitive_data

logger = logging.getLogger(__name__)

SANDBOX_API_ENDPOINT = "https://api.sandbox.bankly.com.br"
SANDBOX_LOGIN_ENDPOINT = "https://login.sandbox.bankly.com.br"
DEFAULT_API_VERSION = "1.0"
DEFAULT_TIMEOUT = 30

ENV_CLIENT_ID = "BANKLY_CLIENT_ID"
ENV_CLIENT_SECRET = "BANKLY_CLIENT_SECRET"


def _as_bytes(value: Union[str, bytes, None]) -> Union[bytes, None]:
    if value is None or isinstance(value, bytes):
        return value
    return value.encode("utf-8")


@dataclass(frozen=True)
class Certificate:
    """
    Certificado do cliente para as chamadas com mTLS.

    ``certificate`` e ``private_key`` são PEM. ``certificate_chain`` é a cadeia
    de CAs (PEM) usada para validar o servidor, quando o Bankly fornecer uma.
    """

    certificate: bytes
    private_key: bytes
    passphrase: Union[bytes, None] = None
    certificate_chain: Union[bytes, None] = None
    client_id: Union[str, None] = None

    def __post_init__(self):
        # aceita str, mas guarda sempre bytes
        object.__setattr__(self, "certificate", _as_bytes(self.certificate))
        object.__setattr__(self, "private_key", _as_bytes(self.private_key))
        object.__setattr__(self, "passphrase", _as_bytes(self.passphrase))
        object.__setattr__(self, "certificate_chain", _as_bytes(self.certificate_chain))

    def load(self):
        try:
            cert = x509.load_pem_x509_certificate(self.certificate, default_backend())
            key = serialization.load_pem_private_key(
                self.private_key, self.passphrase, default_backend()
            )
        except (ValueError, TypeError) as e:
            raise InvalidCertificate(
                f"Não foi possível carregar o certificado do cliente: {e}"
            ) from e
        return cert, key

    @property
    def subject_dn(self) -> str:
        cert, _ = self.load()
        return cert.subject.rfc4514_string()


@dataclass(frozen=True)
class Session:
    login_endpoint: str
    api_endpoint: str
    client_id: str = field(repr=False)
    client_secret: str = field(repr=False)
    api_version: str
    token_cache: TokenCache = field(compare=False, repr=False)
    scopes: str = ""
    certificate: Union[Certificate, None] = field(default=None, repr=False)
    timeout: Union[int, float] = DEFAULT_TIMEOUT

    @property
    def mtls(self) -> bool:
        return self.certificate is not None


def new_session(
    client_id: Union[str, None] = None,
    client_secret: Union[str, None] = None,
    login_endpoint: Union[str, None] = None,
    api_endpoint: Union[str, None] = None,
    api_version: Union[str, None] = None,
    cache: Union[TokenCache, None] = None,
    scopes: Union[str, None] = None,
    certificate: Union[Certificate, None] = None,
    timeout: Union[int, float, None] = None,
) -> Session:
    """
    Valida a configuração e monta a ``Session``.

    O "client_id" e o "client_secret" são lidos das variáveis de ambiente
    ``BANKLY_CLIENT_ID`` e ``BANKLY_CLIENT_SECRET`` quando não forem informados.
    Os endpoints e a versão da API usam os valores do sandbox por padrão.
    Não faz nenhuma chamada de rede.
    """
    if client_id is None:
        client_id = os.environ.get(ENV_CLIENT_ID, "")
    if client_secret is None:
        client_secret = os.environ.get(ENV_CLIENT_SECRET, "")

    if certificate is not None:
        certificate.load()
        if certificate.client_id:
            client_id = certificate.client_id

    if not client_id or not client_secret:
        raise ClientCredentialsMissing()

    session = Session(
        login_endpoint=login_endpoint or SANDBOX_LOGIN_ENDPOINT,
        api_endpoint=api_endpoint or SANDBOX_API_ENDPOINT,
        client_id=client_id,
        client_secret=client_secret,
        api_version=api_version or DEFAULT_API_VERSION,
        token_cache=cache if cache is not None else TokenCache(),
        scopes=scopes or "",
        certificate=certificate,
        timeout=timeout or DEFAULT_TIMEOUT,
    )
    logger.debug(
        f"Sessão criada: api {session.api_endpoint}, login {session.login_endpoint}, "
        f"client_id {mask_sensitive_data(session.client_id)}, mtls {session.mtls}"
    )
    return session
