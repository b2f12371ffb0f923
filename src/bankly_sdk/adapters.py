import logging
import ssl
import time
from typing import Union

import requests
from cryptography import x509
from OpenSSL import crypto
from requests.adapters import HTTPAdapter
from urllib3.contrib.pyopenssl import PyOpenSSLContext

from .session import DEFAULT_TIMEOUT, Certificate, Session
from .utils import mask_headers

logger = logging.getLogger(__name__)


class LoggingHTTPAdapter(HTTPAdapter):
    """
    Adapter que aplica o timeout padrão e registra cada request e resposta.
    """

    def __init__(self, timeout: Union[int, float] = DEFAULT_TIMEOUT, **kwargs):
        self.timeout = timeout
        super().__init__(**kwargs)

    def send(self, request, timeout=None, **kwargs):
        if timeout is None:
            timeout = self.timeout
        request_id = request.headers.get("x-correlation-id")
        logger.debug(
            f"Enviando request {request.method} {request.url} "
            f"headers: {mask_headers(request.headers)}",
            extra={"request_id": request_id},
        )
        inicio = time.monotonic()
        try:
            response = super().send(request, timeout=timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(
                f"Erro de transporte em {request.method} {request.url}: {e}",
                extra={"request_id": request_id},
            )
            raise
        logger.debug(
            f"Resposta {response.status_code} de {request.method} {request.url} "
            f"em {time.monotonic() - inicio:.3f}s",
            extra={"request_id": request_id},
        )
        return response


def create_ssl_context(certificate: Certificate) -> PyOpenSSLContext:
    """
    Monta um contexto SSL com o certificado do cliente carregado em memória,
    sem gravar o PEM em disco.
    """
    cert, key = certificate.load()
    ssl_context = PyOpenSSLContext(ssl.PROTOCOL_TLS_CLIENT)
    ssl_context._ctx.use_certificate(crypto.X509.from_cryptography(cert))
    ssl_context._ctx.use_privatekey(crypto.PKey.from_cryptography_key(key))
    ssl_context._ctx.check_privatekey()
    if certificate.certificate_chain:
        store = ssl_context._ctx.get_cert_store()
        for ca in x509.load_pem_x509_certificates(certificate.certificate_chain):
            store.add_cert(crypto.X509.from_cryptography(ca))
    return ssl_context


class ClientCertificateAdapter(LoggingHTTPAdapter):
    """
    Adapter para as chamadas com mTLS, usando o certificado da sessão.
    """

    def __init__(self, certificate: Certificate, **kwargs):
        self.ssl_context = create_ssl_context(certificate)
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        kwargs["ssl_context"] = self.ssl_context
        return super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args, **kwargs):
        kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(*args, **kwargs)


def build_http_session(session: Session) -> requests.Session:
    if session.certificate is not None:
        adapter = ClientCertificateAdapter(session.certificate, timeout=session.timeout)
    else:
        adapter = LoggingHTTPAdapter(timeout=session.timeout)
    http = requests.Session()
    http.mount("https://", adapter)
    http.mount("http://", adapter)
    return http
