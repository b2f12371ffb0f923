from typing import Iterable, Tuple, Union

import requests


class Error(Exception):
    pass


class ConfigurationError(Error):
    """
    A configuração da sessão é inválida. Levantado na construção, nunca durante
    uma chamada.
    """


class ClientCredentialsMissing(ConfigurationError):
    """
    O "client_id" ou o "client_secret" não foram fornecidos, nem por parâmetro
    nem pelas variáveis de ambiente.
    """

    def __init__(self, message: str = "error client id or client secret"):
        super().__init__(message)


class InvalidCertificate(ConfigurationError):
    """
    O certificado ou a chave privada do mTLS não puderam ser carregados.
    """


class LoginError(Error):
    """
    O endpoint de login recusou as credenciais ou respondeu de forma inesperada.
    """

    def __init__(self, message: str = "error login", http_status: int = 500):
        super().__init__(message)
        self.http_status = http_status
        self.messages: Tuple[str, ...] = (message,)


class DomainError(Error):
    """
    Erro de negócio devolvido pela API do Bankly, traduzido para uma chave estável.

    Compare ``error_key`` (ou use ``matches``) em vez de comparar mensagens.
    """

    def __init__(
        self,
        error_key: str,
        http_status: int,
        messages: Iterable[str] = (),
        definition=None,
        upstream_messages: Iterable[str] = (),
    ):
        self.error_key = error_key
        self.http_status = http_status
        self.messages: Tuple[str, ...] = tuple(messages)
        self.definition = definition
        self.upstream_messages: Tuple[str, ...] = tuple(upstream_messages)
        super().__init__(str(self))

    @classmethod
    def from_definition(cls, definition, upstream_messages: Iterable[str] = ()):
        return cls(
            definition.key,
            definition.http_status,
            (definition.message,),
            definition=definition,
            upstream_messages=upstream_messages,
        )

    def matches(self, definition) -> bool:
        return self.error_key == definition.key

    def __str__(self):
        return f"Key: {self.error_key} - Messages: {' '.join(self.messages)}"

    def __repr__(self):
        return (
            f"{type(self).__name__}(error_key={self.error_key!r}, "
            f"http_status={self.http_status!r}, messages={self.messages!r})"
        )


class RequestCancelled(requests.exceptions.Timeout):
    """
    O prazo da chamada terminou antes do envio da request. É um erro de
    transporte, como os demais erros do requests.
    """

    def __init__(self, message: Union[str, None] = None):
        super().__init__(message or "request cancelled: deadline exceeded")
