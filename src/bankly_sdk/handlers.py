"""
Error handlers por família de recurso.

Um error handler recebe a resposta com status de erro e o id da request e
devolve o ``DomainError`` correspondente. O ``BanklyHTTPClient`` só chama o
handler depois de tratar 404, 403 e 504, então o handler nunca vê esses status.
"""
import logging
from typing import Callable, Union

import requests

from . import catalog
from .catalog import ErrorDefinition
from .error import DomainError
from .mapping import (
    find_card_error,
    find_error,
    find_error_by_error_model,
    find_income_report_error,
    find_pix_error,
    find_transfer_error,
)
from .models import CodeMessageErrorResponse, ErrorResponse, TransferErrorResponse

logger = logging.getLogger(__name__)


def _decode(response: requests.Response, request_id: Union[str, None]):
    try:
        return response.json()
    except ValueError:
        logger.error(
            f"Corpo de erro não é JSON: {response.status_code} - {response.text}",
            extra={"request_id": request_id},
        )
        return None


def _default(definition: ErrorDefinition, response: requests.Response) -> DomainError:
    # o status original é mais útil para o chamador que o status do catálogo
    return DomainError(
        definition.key,
        response.status_code,
        (definition.message,),
        definition=definition,
        upstream_messages=(response.text,) if response.text else (),
    )


def _error_response_handler(
    find: Callable[..., DomainError], default: ErrorDefinition, family: str
):
    def handler(response: requests.Response, request_id: Union[str, None] = None):
        body = _decode(response, request_id)
        if not isinstance(body, dict):
            return _default(default, response)

        envelope = ErrorResponse.from_dict(body)
        if envelope.errors:
            model = envelope.errors[0]
            if not model.code and model.key:
                error = find_error_by_error_model(model)
            else:
                error = find(model.code, *model.messages)
        elif envelope.code:
            error = find(envelope.code, *([envelope.message] if envelope.message else []))
        else:
            return _default(default, response)

        logger.error(
            f"Erro do Bankly ({family}) em {response.url}: {error.error_key} - {body}",
            extra={"request_id": request_id},
        )
        return error

    handler.__name__ = f"{family}_error_handler"
    return handler


default_error_handler = _error_response_handler(
    find_error, catalog.DEFAULT_ERROR, "default"
)
card_error_handler = _error_response_handler(find_card_error, catalog.DEFAULT_CARD, "card")
pix_error_handler = _error_response_handler(find_pix_error, catalog.DEFAULT_PIX, "pix")
income_report_error_handler = _error_response_handler(
    find_income_report_error, catalog.DEFAULT_INCOME_REPORT, "income_report"
)


def transfer_error_handler(
    response: requests.Response, request_id: Union[str, None] = None
) -> DomainError:
    body = _decode(response, request_id)
    if not isinstance(body, dict):
        return _default(catalog.DEFAULT_TRANSFERS, response)

    envelope = TransferErrorResponse.from_dict(body)
    if not envelope.errors and not envelope.code:
        return _default(catalog.DEFAULT_TRANSFERS, response)

    error = find_transfer_error(envelope)
    logger.error(
        f"Erro do Bankly (transfer) em {response.url}: {error.error_key} - {body}",
        extra={"request_id": request_id},
    )
    return error


def boleto_error_handler(
    response: requests.Response, request_id: Union[str, None] = None
) -> DomainError:
    body = _decode(response, request_id)
    if not isinstance(body, dict):
        return _default(catalog.DEFAULT_BOLETOS, response)

    envelope = CodeMessageErrorResponse.from_dict(body)
    if not envelope.code:
        return _default(catalog.DEFAULT_BOLETOS, response)

    error = find_error(envelope.code, *([envelope.message] if envelope.message else []))
    logger.error(
        f"Erro do Bankly (boleto) em {response.url}: {error.error_key} - {body}",
        extra={"request_id": request_id},
    )
    return error
