__version__ = "0.1.0"

from .authentication import Authentication, ClientRegistration, TokenProvider
from .cache import CachedToken, TokenCache
from .catalog import CATALOG, ErrorDefinition
from .client import BanklyHTTPClient
from .error import (
    ClientCredentialsMissing,
    ConfigurationError,
    DomainError,
    Error,
    InvalidCertificate,
    LoginError,
    RequestCancelled,
)
from .handlers import (
    boleto_error_handler,
    card_error_handler,
    default_error_handler,
    income_report_error_handler,
    pix_error_handler,
    transfer_error_handler,
)
from .mapping import (
    find_card_error,
    find_error,
    find_error_by_error_model,
    find_income_report_error,
    find_pix_error,
    find_transfer_error,
)
from .session import Certificate, Session, new_session
