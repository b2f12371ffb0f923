import datetime
import logging
from typing import Protocol, Union

import requests

from . import cache
from .adapters import build_http_session
from .cache import CachedToken
from .error import ConfigurationError, LoginError
from .models import AuthenticationResponse, ClientRegisterResponse, ErrorLoginResponse
from .session import Session
from .utils import join_url, mask_sensitive_data

logger = logging.getLogger(__name__)

LOGIN_PATH = "connect/token"
REGISTER_PATH = "oauth2/register"
TOKEN_CACHE_KEY = "token"
# segundos descontados do "expires_in" para renovar o token antes de expirar
EXPIRATION_MARGIN = 10


class TokenProvider(Protocol):
    def token(
        self, timeout: Union[int, float, None] = None, request_id: Union[str, None] = None
    ) -> str:
        ...


class Authentication(object):
    """
    Obtém e guarda em cache o token de acesso (OAuth2 "client_credentials").

    O token fica no cache da sessão até ``expires_in - 10`` segundos depois da
    resposta do login. Chamadas concorrentes podem fazer logins duplicados
    enquanto o cache está vazio; o último token gravado vence.
    """

    def __init__(self, session: Session, http: Union[requests.Session, None] = None):
        self.session = session
        self.http = http or build_http_session(session)

    def token(
        self, timeout: Union[int, float, None] = None, request_id: Union[str, None] = None
    ) -> str:
        cached = self.session.token_cache.get(TOKEN_CACHE_KEY)
        if isinstance(cached, CachedToken) and not cached.is_expired():
            return cached.authorization

        logger.debug(
            "Token ausente ou expirado. Solicitando novo access token.",
            extra={"request_id": request_id},
        )
        response = self.__login(timeout, request_id)
        ttl = max(response.expires_in - EXPIRATION_MARGIN, 0)
        token = CachedToken(
            value=response.access_token,
            token_type=response.token_type,
            expires_at=cache._now() + datetime.timedelta(seconds=ttl),
        )
        self.session.token_cache.set(TOKEN_CACHE_KEY, token, ttl=ttl)
        return token.authorization

    def invalidate(self):
        self.session.token_cache.delete(TOKEN_CACHE_KEY)

    def __login(
        self, timeout: Union[int, float, None], request_id: Union[str, None]
    ) -> AuthenticationResponse:
        params = {
            "grant_type": "client_credentials",
            "client_id": mask_sensitive_data(self.session.client_id),
            "client_secret": mask_sensitive_data(self.session.client_secret),
            "scope": self.session.scopes,
        }
        logger.debug(f"payload: {params}", extra={"request_id": request_id})
        params["client_id"] = self.session.client_id
        params["client_secret"] = self.session.client_secret

        response = self.http.post(
            join_url(self.session.login_endpoint, LOGIN_PATH),
            data=params,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=timeout or self.session.timeout,
        )

        if response.status_code == 200:
            try:
                return AuthenticationResponse.from_dict(response.json())
            except (ValueError, KeyError) as e:
                logger.error(
                    f"Resposta de login inválida: {e}", extra={"request_id": request_id}
                )
                raise LoginError() from e

        logger.error(
            f"Login recusado com status {response.status_code}",
            extra={"request_id": request_id},
        )
        if response.status_code == 400:
            try:
                body = ErrorLoginResponse.from_dict(response.json())
            except ValueError:
                raise LoginError(response.text or "error login", 400)
            raise LoginError(body.message or "error login", 400)

        raise LoginError()


class ClientRegistration(object):
    """
    Registro dinâmico do cliente com autenticação por certificado (mTLS).

    O Bankly devolve o "client_id" que passa a ser usado nas sessões com o
    mesmo certificado.
    """

    def __init__(
        self,
        session: Session,
        company_key: str,
        http: Union[requests.Session, None] = None,
    ):
        if session.certificate is None:
            raise ConfigurationError(
                'Você precisa fornecer o "certificate" para registrar o cliente.'
            )
        self.session = session
        self.company_key = company_key
        self.http = http or build_http_session(session)

    def register(self, timeout: Union[int, float, None] = None) -> ClientRegisterResponse:
        data = {
            "grant_types": ["client_credentials"],
            "response_types": ["access_token"],
            "token_endpoint_auth_method": "tls_client_auth",
            "tls_client_auth_subject_dn": self.session.certificate.subject_dn,
            "company_key": self.company_key,
            "scope": self.session.scopes,
        }
        logger.debug(f"Registrando cliente: {data}")

        response = self.http.post(
            join_url(self.session.login_endpoint, REGISTER_PATH),
            json=data,
            timeout=timeout or self.session.timeout,
        )

        if response.status_code != 201:
            logger.error(
                f"Registro do cliente recusado: {response.status_code} - {response.text}"
            )
            raise LoginError()

        return ClientRegisterResponse.from_dict(response.json())
