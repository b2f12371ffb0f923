"""
Tradução dos códigos de erro do Bankly para o catálogo local.

A tradução acontece em duas etapas. Primeiro o código é normalizado: códigos
genéricos como ``INVALID_PARAMETER`` são desambiguados procurando trechos
conhecidos nas mensagens (sem diferenciar maiúsculas, o primeiro trecho
encontrado vence). Depois o código normalizado é procurado na tabela da
família (genérica, cartões, PIX, informe de rendimentos ou transferências).
Um código desconhecido vira um ``DomainError`` 409 com as mensagens originais.

Os trechos dependem do texto em inglês devolvido pelo Bankly. Trate-os como
configuração: ``NormalizationRule`` e ``ErrorFamily`` permitem montar famílias
com outras regras sem alterar este módulo.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple, Union

from . import catalog
from .catalog import ErrorDefinition
from .error import DomainError
from .models import ErrorModel, KeyValueErrorModel, TransferErrorResponse

UNKNOWN_ERROR_KEY = "UNKNOWN_ERROR"


@dataclass(frozen=True)
class NormalizationRule:
    code: str
    hints: Tuple[Tuple[str, str], ...]
    default: Union[str, None] = None

    def apply(self, messages: Iterable[str]) -> Union[str, None]:
        messages = [(m or "").lower() for m in messages]
        for message in messages:
            for fragment, normalized in self.hints:
                if fragment in message:
                    return normalized
        if messages and self.default:
            return self.default
        return None


@dataclass(frozen=True)
class ErrorFamily:
    name: str
    table: Mapping[str, ErrorDefinition]
    rules: Tuple[NormalizationRule, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    fallback_status: int = 409

    def normalize(self, code: str, messages: Iterable[str] = ()) -> str:
        code = self.aliases.get(code, code)
        for rule in self.rules:
            if rule.code == code:
                return rule.apply(messages) or code
        return code

    def find(self, code: str, *messages: str) -> DomainError:
        normalized = self.normalize(code, messages)
        definition = self.table.get(normalized)
        if definition is not None:
            return DomainError.from_definition(definition, upstream_messages=messages)
        return DomainError(
            normalized or UNKNOWN_ERROR_KEY,
            self.fallback_status,
            messages,
            upstream_messages=messages,
        )


def _table(entries) -> Mapping[str, ErrorDefinition]:
    return MappingProxyType(dict(entries))


GENERIC_RULES = (
    NormalizationRule(
        "INVALID_PARAMETER",
        (
            ("length of 'building number'", "INVALID_ADDRESS_NUMBER_LENGTH"),
            ("length of 'register name'", "INVALID_REGISTER_NAME_LENGTH"),
            ("length of 'social name'", "INVALID_SOCIAL_NAME_LENGTH"),
            ("length of 'email'", "INVALID_EMAIL_LENGTH"),
            (
                "not allowed to include numbers or special characters",
                "INVALID_PARAMETER_SPECIAL_CHARACTERS",
            ),
            ("length of", "INVALID_PARAMETER_LENGTH"),
        ),
    ),
)

GENERIC = ErrorFamily(
    "generic",
    _table(
        [
            ("INVALID_PERSONAL_BUSINESS_SIZE", catalog.INVALID_BUSINESS_SIZE),
            ("EMAIL_ALREADY_IN_USE", catalog.EMAIL_ALREADY_IN_USE),
            ("PHONE_ALREADY_IN_USE", catalog.PHONE_ALREADY_IN_USE),
            (
                "CUSTOMER_REGISTRATION_CANNOT_BE_REPLACED",
                catalog.CUSTOMER_REGISTRATION_CANNOT_BE_REPLACED,
            ),
            ("ACCOUNT_HOLDER_NOT_EXISTS", catalog.ACCOUNT_HOLDER_NOT_EXISTS),
            ("HOLDER_ALREADY_HAVE_A_ACCOUNT", catalog.HOLDER_ALREADY_HAVE_A_ACCOUNT),
            ("SCOUTER_QUANTITY", catalog.SCOUTER_QUANTITY),
            ("BANKSLIP_SETTLEMENT_STATUS_VALIDATE", catalog.BOLETO_INVALID_STATUS),
            ("BAR_CODE_NOT_FOUND", catalog.BARCODE_NOT_FOUND),
            ("INVALID_PARAMETER", catalog.INVALID_PARAMETER),
            ("INVALID_PARAMETER_LENGTH", catalog.INVALID_PARAMETER_LENGTH),
            (
                "INVALID_PARAMETER_SPECIAL_CHARACTERS",
                catalog.INVALID_PARAMETER_SPECIAL_CHARACTERS,
            ),
            ("INVALID_ADDRESS_NUMBER_LENGTH", catalog.INVALID_ADDRESS_NUMBER_LENGTH),
            ("INVALID_REGISTER_NAME_LENGTH", catalog.INVALID_REGISTER_NAME_LENGTH),
            ("INVALID_SOCIAL_NAME_LENGTH", catalog.INVALID_SOCIAL_NAME_LENGTH),
            ("INVALID_EMAIL_LENGTH", catalog.INVALID_EMAIL_LENGTH),
            (
                "HOLDER_HAS_SOME_ACCOUNTS_WITH_NON_ZERO_BALANCE",
                catalog.ACCOUNT_NON_ZERO_BALANCE,
            ),
            ("HOLDER_HAS_ALREADY_BEEN_CANCELED", catalog.ACCOUNT_ALREADY_BEEN_CANCELED),
        ]
    ),
    rules=GENERIC_RULES,
)

CARD = ErrorFamily(
    "card",
    _table(
        [
            ("INVALID_CARD_PASSWORD", catalog.INVALID_PASSWORD),
            (
                "OPERATION_NOT_ALLOWED_FOR_CURRENT_CARD_STATUS",
                catalog.OPERATION_NOT_ALLOWED_CARD_STATUS,
            ),
            ("CARD_ALREADY_ACTIVATED", catalog.CARD_ALREADY_ACTIVATED),
            ("CARD_SERVICE_UNAVAILABLE", catalog.CARD_SERVICE_UNAVAILABLE),
            ("INVALID_CARD_NAME_EMPTY", catalog.INVALID_CARD_NAME),
            ("INVALID_DOCUMENT_NUMBER_EMPTY", catalog.INVALID_IDENTIFIER),
            ("INVALID_PARAMETER_CARD", catalog.INVALID_PARAMETER),
        ]
    ),
    rules=(
        NormalizationRule(
            "INVALID_PARAMETER",
            (
                ("card name", "INVALID_CARD_NAME_EMPTY"),
                ("document number", "INVALID_DOCUMENT_NUMBER_EMPTY"),
            ),
            default="INVALID_PARAMETER_CARD",
        ),
    ),
    # códigos numéricos do processador de cartões
    aliases=MappingProxyType(
        {
            "009": "OPERATION_NOT_ALLOWED_FOR_CURRENT_CARD_STATUS",
            "011": "INVALID_CARD_PASSWORD",
            "021": "CARD_ALREADY_ACTIVATED",
        }
    ),
)

PIX = ErrorFamily(
    "pix",
    _table(
        [
            ("ENTRY_NOT_FOUND", catalog.KEY_NOT_FOUND),
            ("INVALID_QRCODE_PAYLOAD_CONTENT_TO_DECODE", catalog.INVALID_QRCODE_PAYLOAD),
            ("INVALID_KEY_TYPE", catalog.INVALID_KEY_TYPE),
            ("INVALID_PARAMETER_PIX", catalog.INVALID_PARAMETER_PIX),
            ("INSUFFICIENT_BALANCE", catalog.INSUFFICIENT_BALANCE_PIX),
            ("INVALID_ACCOUNT_TYPE", catalog.INVALID_ACCOUNT_TYPE),
        ]
    ),
    rules=(
        NormalizationRule(
            "INVALID_PARAMETER",
            (
                (
                    "addressing key value does not match with addressing key type",
                    "INVALID_KEY_TYPE",
                ),
                ("sender.account.type", "INVALID_ACCOUNT_TYPE"),
            ),
            default="INVALID_PARAMETER_PIX",
        ),
    ),
)

INCOME_REPORT = ErrorFamily(
    "income_report",
    _table(
        [
            ("INVALID_CALENDAR_FOR_INCOME_REPORT", catalog.INVALID_INCOME_REPORT_CALENDAR),
            ("INVALID_PARAMETER_INCOME_REPORT", catalog.INVALID_INCOME_REPORT_PARAMETER),
        ]
    ),
    rules=(
        NormalizationRule(
            "CALENDAR_NOT_ALLOWED",
            (("calendar informed is not allowed", "INVALID_CALENDAR_FOR_INCOME_REPORT"),),
            default="INVALID_PARAMETER_INCOME_REPORT",
        ),
    ),
)

TRANSFER_TABLE: Mapping[str, ErrorDefinition] = _table(
    [
        ("x-correlation-id", catalog.INVALID_CORRELATION_ID),
        ("$.amount", catalog.INVALID_AMOUNT),
        ("INSUFFICIENT_BALANCE", catalog.INSUFFICIENT_BALANCE),
        ("CASH_OUT_NOT_ALLOWED_OUT_OF_BUSINESS_PERIOD", catalog.OUT_OF_SERVICE_PERIOD),
        ("CASHOUT_LIMIT_NOT_ENOUGH", catalog.CASHOUT_LIMIT_NOT_ENOUGH),
        ("Recipient.Branch", catalog.INVALID_RECIPIENT_BRANCH),
        ("Recipient.Account", catalog.INVALID_RECIPIENT_ACCOUNT),
    ]
)

FAMILIES: Mapping[str, ErrorFamily] = MappingProxyType(
    {family.name: family for family in (GENERIC, CARD, PIX, INCOME_REPORT)}
)


def find_error(code: str, *messages: str) -> DomainError:
    return GENERIC.find(code, *messages)


def find_card_error(code: str, *messages: str) -> DomainError:
    return CARD.find(code, *messages)


def find_pix_error(code: str, *messages: str) -> DomainError:
    return PIX.find(code, *messages)


def find_income_report_error(code: str, *messages: str) -> DomainError:
    return INCOME_REPORT.find(code, *messages)


def find_error_by_error_model(model: Union[ErrorModel, dict]) -> DomainError:
    if isinstance(model, dict):
        model = ErrorModel.from_dict(model)
    if model.code:
        return find_error(model.code, *model.messages)
    return DomainError(model.key or UNKNOWN_ERROR_KEY, 400, (model.value,))


def find_transfer_error(envelope: Union[TransferErrorResponse, dict]) -> DomainError:
    """
    Traduz o erro de uma transferência.

    O Bankly devolve os erros de transferência como lista de ``{key, value}`` ou
    apenas como ``{code, message}`` no topo do corpo. No segundo caso o código é
    tratado como a chave de uma lista com um único item.
    """
    if isinstance(envelope, dict):
        envelope = TransferErrorResponse.from_dict(envelope)

    errors = list(envelope.errors)
    if not errors and envelope.code:
        errors = [KeyValueErrorModel(key=envelope.code, value=envelope.message)]
    if not errors:
        return DomainError.from_definition(catalog.DEFAULT_TRANSFERS)

    first = errors[0]
    definition = TRANSFER_TABLE.get(first.key)
    if definition is not None:
        return DomainError.from_definition(
            definition, upstream_messages=[e.value for e in errors if e.value]
        )
    return DomainError(
        first.key or UNKNOWN_ERROR_KEY,
        400,
        (f"{first.key} - {first.value}",),
        upstream_messages=[first.value] if first.value else (),
    )
