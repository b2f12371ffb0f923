import uuid
from typing import Dict, Mapping, Union
from urllib.parse import urlencode, urlsplit, urlunsplit

SENSITIVE_HEADERS = ("authorization", "client_secret", "client-secret")


def mask_sensitive_data(value):
    """
    Esta função recebe um valor sensível, como uma senha ou informação confidencial,
    e retorna uma versão mascarada do mesmo.

    Parâmetros:
    - value (str): O valor sensível que será mascarado.

    Retorna:
    - str: Uma versão mascarada do valor, onde apenas o primeiro caractere é revelado
    e os caracteres restantes são substituídos por '*'. Se o valor não for uma string
    ou tiver apenas um caractere, o valor original é retornado sem alterações.
    """
    if isinstance(value, str) and len(value) > 1:
        return value[0] + "*" * (len(value) - 1)
    return value


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Cópia dos headers com os valores sensíveis mascarados, para log."""
    return {
        key: mask_sensitive_data(value) if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def join_url(base_url: str, path: str) -> str:
    """
    Junta o endpoint base com o caminho relativo, sem barras duplicadas ou faltando.

    ``join_url("https://api.example.com/v2/", "/cards/document/123")`` retorna
    ``"https://api.example.com/v2/cards/document/123"``.
    """
    scheme, netloc, base_path, query, fragment = urlsplit(base_url)
    segments = [
        segment
        for part in (base_path, path or "")
        for segment in part.split("/")
        if segment
    ]
    return urlunsplit((scheme, netloc, "/" + "/".join(segments), query, fragment))


def build_query(endpoint: str, query: Union[Mapping[str, object], None]) -> str:
    params = {key: value for key, value in (query or {}).items() if value is not None}
    if not params:
        return endpoint
    separator = "&" if "?" in endpoint else "?"
    return endpoint + separator + urlencode(params, doseq=True)


def new_request_id() -> str:
    return str(uuid.uuid4())
