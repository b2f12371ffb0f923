from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


def _as_dict(data) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _as_messages(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class AuthenticationResponse:
    access_token: str
    expires_in: int
    token_type: str

    @classmethod
    def from_dict(cls, data: dict) -> "AuthenticationResponse":
        data = _as_dict(data)
        return cls(
            access_token=data["access_token"],
            expires_in=int(data.get("expires_in") or 0),
            token_type=data.get("token_type") or "Bearer",
        )


@dataclass
class ErrorLoginResponse:
    message: str

    @classmethod
    def from_dict(cls, data: dict) -> "ErrorLoginResponse":
        return cls(message=str(_as_dict(data).get("error") or ""))


@dataclass
class KeyValueErrorModel:
    key: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "KeyValueErrorModel":
        data = _as_dict(data)
        return cls(key=data.get("key") or "", value=data.get("value") or "")


@dataclass
class ErrorModel:
    code: str = ""
    property_name: str = ""
    messages: List[str] = field(default_factory=list)
    key: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ErrorModel":
        data = _as_dict(data)
        return cls(
            code=data.get("code") or "",
            property_name=data.get("propertyName") or "",
            messages=_as_messages(data.get("messages")),
            key=data.get("key") or "",
            value=data.get("value") or "",
        )


@dataclass
class CodeMessageErrorResponse:
    """Formato ``{code, message}`` usado por pagamentos e boletos."""

    code: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CodeMessageErrorResponse":
        data = _as_dict(data)
        return cls(code=data.get("code") or "", message=data.get("message") or "")


@dataclass
class ErrorResponse:
    """Formato genérico ``{errors: [{code, messages}], reference}``."""

    errors: List[ErrorModel] = field(default_factory=list)
    reference: str = ""
    code: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ErrorResponse":
        data = _as_dict(data)
        return cls(
            errors=[ErrorModel.from_dict(e) for e in data.get("errors") or []],
            reference=data.get("reference") or "",
            code=data.get("code") or "",
            message=data.get("message") or "",
        )


@dataclass
class TransferErrorResponse:
    """Formato das transferências ``{errors: [{key, value}], code, message}``."""

    errors: List[KeyValueErrorModel] = field(default_factory=list)
    code: str = ""
    message: str = ""
    layer: str = ""
    application_name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "TransferErrorResponse":
        data = _as_dict(data)
        return cls(
            errors=[KeyValueErrorModel.from_dict(e) for e in data.get("errors") or []],
            code=data.get("code") or "",
            message=data.get("message") or "",
            layer=data.get("layer") or "",
            application_name=data.get("applicationName") or "",
        )


@dataclass
class ClientRegisterResponse:
    client_id: str
    client_id_issued_at: Union[int, None] = None
    scope: str = ""
    company_key: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "ClientRegisterResponse":
        data = _as_dict(data)
        return cls(
            client_id=data.get("client_id") or "",
            client_id_issued_at=data.get("client_id_issued_at"),
            scope=data.get("scope") or "",
            company_key=data.get("company_key") or "",
            raw=data,
        )
