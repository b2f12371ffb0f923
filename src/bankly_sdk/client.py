import dataclasses
import json
import logging
import time
from typing import Callable, Literal, Mapping, Union

import requests

from . import catalog
from .adapters import build_http_session
from .authentication import Authentication, TokenProvider
from .error import DomainError, Error, RequestCancelled
from .session import Session
from .utils import build_query, join_url, new_request_id

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[requests.Response, Union[str, None]], Error]

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

SUCCESS_STATUS = (200, 201, 202, 204)
# respondidos da mesma forma para todos os recursos, antes do error handler
TRANSPORT_STATUS = {
    404: catalog.ENTRY_NOT_FOUND,
    403: catalog.SERVICE_FORBIDDEN,
    504: catalog.GATEWAY_TIMEOUT,
}


def _default_json(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class BanklyHTTPClient(object):
    """
    Ponto único de saída das chamadas para a API do Bankly.

    Monta a URL a partir do endpoint da sessão, obtém o token, injeta os headers
    padrão, envia a request e classifica a resposta. Status de sucesso devolvem a
    resposta crua; 404, 403 e 504 viram erros do catálogo; os demais vão para o
    ``error_handler`` do recurso.
    """

    def __init__(
        self,
        session: Session,
        authentication: Union[TokenProvider, None] = None,
        http: Union[requests.Session, None] = None,
        error_handler: Union[ErrorHandler, None] = None,
    ):
        self.session = session
        self.http = http or build_http_session(session)
        self.authentication = authentication or Authentication(session, http=self.http)
        self.error_handler = error_handler

    def set_error_handler(self, handler: Union[ErrorHandler, None]):
        self.error_handler = handler

    def endpoint(self, path: str, query: Union[Mapping[str, object], None] = None) -> str:
        return build_query(join_url(self.session.api_endpoint, path), query)

    def new_request(
        self,
        method: HttpMethod,
        path: str,
        body=None,
        query: Union[Mapping[str, object], None] = None,
        headers: Union[Mapping[str, str], None] = None,
        request_id: Union[str, None] = None,
        timeout: Union[int, float, None] = None,
    ) -> requests.PreparedRequest:
        request_id = request_id or new_request_id()
        url = self.endpoint(path, query)
        logger.debug(f"Endpoint: {method} {url}", extra={"request_id": request_id})

        data = None
        if body is not None:
            data = json.dumps(body, default=_default_json)

        token = self.authentication.token(timeout=timeout, request_id=request_id)

        request_headers = {
            "Authorization": token,
            "api-version": self.session.api_version,
            "x-correlation-id": request_id,
        }
        if data is not None:
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)

        request = requests.Request(method, url, data=data, headers=request_headers)
        return self.http.prepare_request(request)

    def request(
        self,
        method: HttpMethod,
        path: str,
        body=None,
        query: Union[Mapping[str, object], None] = None,
        headers: Union[Mapping[str, str], None] = None,
        request_id: Union[str, None] = None,
        timeout: Union[int, float, None] = None,
    ) -> requests.Response:
        """
        Monta, envia e classifica a request.

        ``timeout`` é um prazo único para a obtenção do token e o envio. Se ele
        terminar antes do envio, levanta ``RequestCancelled``. Depois do envio o
        tempo restante é repassado ao requests, que o aplica a cada operação de
        socket (conexão e cada leitura), e não à chamada inteira. Uma resposta
        lenta pode, portanto, ultrapassar o ``timeout`` informado.
        """
        request_id = request_id or new_request_id()
        timeout = timeout or self.session.timeout
        deadline = time.monotonic() + timeout

        prepared = self.new_request(
            method, path, body, query, headers, request_id=request_id, timeout=timeout
        )
        return self.do(prepared, request_id=request_id, timeout=_remaining(deadline))

    def do(
        self,
        prepared: requests.PreparedRequest,
        request_id: Union[str, None] = None,
        timeout: Union[int, float, None] = None,
    ) -> requests.Response:
        response = self.http.send(prepared, timeout=timeout or self.session.timeout)
        return self.handle_response(response, request_id)

    def handle_response(
        self, response: requests.Response, request_id: Union[str, None] = None
    ) -> requests.Response:
        logger.info(
            f"Status da resposta: {response.status_code}",
            extra={"request_id": request_id},
        )
        if response.status_code in SUCCESS_STATUS:
            return response

        definition = TRANSPORT_STATUS.get(response.status_code)
        if definition is not None:
            raise DomainError.from_definition(definition)

        if self.error_handler is not None:
            raise self.error_handler(response, request_id)

        raise DomainError(
            catalog.DEFAULT_ERROR.key,
            response.status_code,
            (response.text,),
            definition=catalog.DEFAULT_ERROR,
        )

    def get(
        self,
        path: str,
        query: Union[Mapping[str, object], None] = None,
        headers: Union[Mapping[str, str], None] = None,
        **kwargs,
    ) -> requests.Response:
        return self.request("GET", path, query=query, headers=headers, **kwargs)

    def post(
        self,
        path: str,
        body=None,
        headers: Union[Mapping[str, str], None] = None,
        **kwargs,
    ) -> requests.Response:
        return self.request("POST", path, body=body, headers=headers, **kwargs)

    def put(
        self,
        path: str,
        body=None,
        headers: Union[Mapping[str, str], None] = None,
        **kwargs,
    ) -> requests.Response:
        return self.request("PUT", path, body=body, headers=headers, **kwargs)

    def patch(
        self,
        path: str,
        body=None,
        query: Union[Mapping[str, object], None] = None,
        headers: Union[Mapping[str, str], None] = None,
        **kwargs,
    ) -> requests.Response:
        return self.request(
            "PATCH", path, body=body, query=query, headers=headers, **kwargs
        )

    def delete(
        self,
        path: str,
        body=None,
        headers: Union[Mapping[str, str], None] = None,
        **kwargs,
    ) -> requests.Response:
        return self.request("DELETE", path, body=body, headers=headers, **kwargs)


def _remaining(deadline: float) -> float:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise RequestCancelled()
    return remaining
