"""
Catálogo de erros do SDK.

Cada entrada é uma ``ErrorDefinition`` imutável (chave, status HTTP e mensagem
padrão). O catálogo é montado uma única vez, na importação do módulo, e exposto
como um mapeamento somente leitura em ``CATALOG``.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping


@dataclass(frozen=True)
class ErrorDefinition:
    key: str
    http_status: int
    message: str


_definitions: Dict[str, ErrorDefinition] = {}


def _define(key: str, http_status: int, message: str) -> ErrorDefinition:
    if key in _definitions:
        raise ValueError(f"Chave de erro duplicada no catálogo: {key}")
    definition = ErrorDefinition(key, http_status, message)
    _definitions[key] = definition
    return definition


# Transporte
ENTRY_NOT_FOUND = _define("NOT_FOUND", 404, "not found")
SERVICE_FORBIDDEN = _define("SERVICE_FORBIDDEN", 403, "error service forbidden")
GATEWAY_TIMEOUT = _define("GATEWAY_TIMEOUT", 504, "error gateway timeout")
DEFAULT_ERROR = _define("DEFAULT_ERROR", 500, "unexpected error")

# Autenticação e configuração
INVALID_TOKEN = _define("INVALID_TOKEN", 409, "invalid token")
DEFAULT_LOGIN = _define("DEFAULT_LOGIN", 500, "error login")
CLIENT_CREDENTIALS_MISSING = _define(
    "CLIENT_CREDENTIALS_MISSING", 500, "error client id or client secret"
)
INVALID_API_ENDPOINT = _define("INVALID_API_ENDPOINT", 400, "invalid api endpoint")
METHOD_NOT_ALLOWED = _define("METHOD_NOT_ALLOWED", 405, "method not allowed")

# Clientes e empresas
DUPLICATE_COMPANY = _define("DUPLICATE_COMPANY", 409, "duplicate company")
INVALID_BUSINESS_SIZE = _define("INVALID_BUSINESS_SIZE", 400, "invalid business size")
EMAIL_ALREADY_IN_USE = _define("EMAIL_ALREADY_IN_USE", 400, "email already in use")
PHONE_ALREADY_IN_USE = _define("PHONE_ALREADY_IN_USE", 400, "phone already in use")
CUSTOMER_REGISTRATION_CANNOT_BE_REPLACED = _define(
    "CUSTOMER_REGISTRATION_CANNOT_BE_REPLACED",
    409,
    "customer registration cannot be replaced",
)
ACCOUNT_HOLDER_NOT_EXISTS = _define(
    "ACCOUNT_HOLDER_NOT_EXISTS", 400, "account holder not exists"
)
HOLDER_ALREADY_HAVE_A_ACCOUNT = _define(
    "HOLDER_ALREADY_HAVE_A_ACCOUNT", 409, "holder already have a account"
)
ACCOUNT_NON_ZERO_BALANCE = _define(
    "ACCOUNT_NON_ZERO_BALANCE", 409, "error account non zero balance"
)
ACCOUNT_ALREADY_BEEN_CANCELED = _define(
    "ACCOUNT_ALREADY_BEEN_CANCELED", 422, "error account already been canceled"
)
ACCOUNT_NOT_FOUND = _define("ACCOUNT_NOT_FOUND", 404, "error account not found")
DEFAULT_BUSINESS_ACCOUNTS = _define(
    "DEFAULT_BUSINESS_ACCOUNTS", 500, "error business accounts"
)
DEFAULT_CUSTOMERS_ACCOUNTS = _define(
    "DEFAULT_CUSTOMERS_ACCOUNTS", 500, "error customers accounts"
)
DEFAULT_CANCEL_CUSTOMERS_ACCOUNTS = _define(
    "DEFAULT_CANCEL_CUSTOMERS_ACCOUNTS", 409, "error cancel customers accounts"
)

# Parâmetros inválidos
INVALID_PARAMETER = _define("INVALID_PARAMETER", 400, "invalid parameter")
INVALID_PARAMETER_LENGTH = _define(
    "INVALID_PARAMETER_LENGTH", 400, "invalid parameter length"
)
INVALID_ADDRESS_NUMBER_LENGTH = _define(
    "INVALID_ADDRESS_NUMBER_LENGTH", 400, "invalid address number length"
)
INVALID_REGISTER_NAME_LENGTH = _define(
    "INVALID_REGISTER_NAME_LENGTH", 400, "invalid register name length"
)
INVALID_PARAMETER_SPECIAL_CHARACTERS = _define(
    "INVALID_PARAMETER_SPECIAL_CHARACTERS",
    400,
    "invalid parameter with special characters",
)
INVALID_SOCIAL_NAME_LENGTH = _define(
    "INVALID_SOCIAL_NAME_LENGTH", 400, "invalid social name length"
)
INVALID_EMAIL_LENGTH = _define("INVALID_EMAIL_LENGTH", 400, "invalid email length")

# Saldo, extrato e banco
DEFAULT_BALANCE = _define("DEFAULT_BALANCE", 500, "error balance")
DEFAULT_BANK = _define("DEFAULT_BANK", 500, "error bank")
DEFAULT_BANK_STATEMENTS = _define(
    "DEFAULT_BANK_STATEMENTS", 500, "error bank statements"
)

# Transferências
INVALID_CORRELATION_ID = _define(
    "INVALID_CORRELATION_ID", 400, "invalid correlation id"
)
INVALID_AMOUNT = _define("INVALID_AMOUNT", 400, "invalid amount")
INSUFFICIENT_BALANCE = _define("INSUFFICIENT_BALANCE", 400, "insufficient balance")
INVALID_AUTHENTICATION_CODE_OR_ACCOUNT = _define(
    "INVALID_AUTHENTICATION_CODE_OR_ACCOUNT",
    400,
    "invalid authentication code or account number",
)
INVALID_ACCOUNT_NUMBER = _define(
    "INVALID_ACCOUNT_NUMBER", 400, "invalid account number"
)
OUT_OF_SERVICE_PERIOD = _define("OUT_OF_SERVICE_PERIOD", 400, "out of service period")
CASHOUT_LIMIT_NOT_ENOUGH = _define(
    "CASHOUT_LIMIT_NOT_ENOUGH", 400, "cashout limit not enough"
)
INVALID_RECIPIENT_BRANCH = _define(
    "INVALID_RECIPIENT_BRANCH", 409, "invalid recipient branch number"
)
INVALID_RECIPIENT_ACCOUNT = _define(
    "INVALID_RECIPIENT_ACCOUNT", 409, "invalid recipient account number"
)
DEFAULT_TRANSFERS = _define("DEFAULT_TRANSFERS", 409, "error transfers")
DEFAULT_FIND_TRANSFERS = _define("DEFAULT_FIND_TRANSFERS", 409, "error find transfers")

# Boletos e pagamentos
SCOUTER_QUANTITY = _define("SCOUTER_QUANTITY", 422, "max boleto amount per day reached")
BOLETO_INVALID_STATUS = _define(
    "BOLETO_INVALID_STATUS", 422, "boleto was in an invalid status"
)
BARCODE_NOT_FOUND = _define("BARCODE_NOT_FOUND", 404, "bar code not found")
PAYMENT_INVALID_STATUS = _define(
    "PAYMENT_INVALID_STATUS", 422, "payment was in an invalid status"
)
DEFAULT_PAYMENT = _define("DEFAULT_PAYMENT", 500, "error payment")
DEFAULT_BOLETOS = _define("DEFAULT_BOLETOS", 500, "error bank boletos")

# Análise de documentos
SEND_DOCUMENT_ANALYSIS = _define(
    "SEND_DOCUMENT_ANALYSIS", 405, "send document analysis error"
)
GET_DOCUMENT_ANALYSIS = _define(
    "GET_DOCUMENT_ANALYSIS", 405, "get document analysis error"
)

# Informe de rendimentos
INVALID_INCOME_REPORT_CALENDAR = _define(
    "INVALID_INCOME_REPORT_CALENDAR", 400, "invalid income report calendar"
)
INVALID_INCOME_REPORT_PARAMETER = _define(
    "INVALID_INCOME_REPORT_PARAMETER", 400, "invalid income report parameter"
)
DEFAULT_INCOME_REPORT = _define("DEFAULT_INCOME_REPORT", 500, "error income report")

# Cartões
DEFAULT_CARD = _define("DEFAULT_CARD", 500, "error card")
CARD_ACTIVATE = _define("CARD_ACTIVATE", 304, "error card activate")
CARD_STATUS_UPDATE = _define("CARD_STATUS_UPDATE", 304, "error update status card")
CARD_PASSWORD_UPDATE = _define(
    "CARD_PASSWORD_UPDATE", 304, "error update password card"
)
INVALID_PASSWORD = _define("INVALID_PASSWORD", 401, "invalid password")
INVALID_CARD_NAME = _define("INVALID_CARD_NAME", 400, "invalid card name")
INVALID_IDENTIFIER = _define("INVALID_IDENTIFIER", 400, "invalid identifier")
CARD_ALREADY_ACTIVATED = _define("CARD_ALREADY_ACTIVATED", 409, "card already activated")
CARD_SERVICE_UNAVAILABLE = _define(
    "CARD_SERVICE_UNAVAILABLE", 503, "card service unavailable"
)
OPERATION_NOT_ALLOWED_CARD_STATUS = _define(
    "OPERATION_NOT_ALLOWED_CARD_STATUS",
    405,
    "operation not allowed for current card status",
)

# PIX
DEFAULT_PIX = _define("DEFAULT_PIX", 500, "error pix")
KEY_NOT_FOUND = _define("KEY_NOT_FOUND", 404, "key not found")
INVALID_QRCODE_PAYLOAD = _define("INVALID_QRCODE_PAYLOAD", 409, "invalid qrcode payload")
INVALID_KEY_TYPE = _define("INVALID_KEY_TYPE", 422, "invalid key type")
INVALID_PARAMETER_PIX = _define("INVALID_PARAMETER_PIX", 422, "invalid parameter")
INSUFFICIENT_BALANCE_PIX = _define("INSUFFICIENT_BALANCE_PIX", 409, "insufficient balance")
INVALID_ACCOUNT_TYPE = _define("INVALID_ACCOUNT_TYPE", 422, "invalid account type")


CATALOG: Mapping[str, ErrorDefinition] = MappingProxyType(dict(_definitions))

del _definitions
