"""Filters aplicados ao handler raiz do gateway.

- CorrelationIdFilter: anexa o correlation_id da chamada corrente.
- CredentialRedactionFilter: mascara material de credencial (tokens OAuth,
  client secret, API key, chave PEM) antes da formatacao. Bibliotecas como
  oauthlib logam corpos de requisicao em DEBUG, entao a mascara vale para
  qualquer logger que propague ate a raiz.
"""

from __future__ import annotations

import logging
import re
from re import Pattern
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED: Final = "[REDACTED]"

_SECRET_PATTERNS: Final[tuple[tuple[Pattern[str], str], ...]] = (
    # Credentials.to_json() e respostas de token: {"refresh_token": "1//0g..."}
    (
        re.compile(
            r'("(?:token|access_token|refresh_token|id_token|client_secret|private_key)"'
            r'\s*:\s*)"[^"]*"'
        ),
        rf'\1"{REDACTED}"',
    ),
    # Query strings e corpos form-encoded: code=4/0Ab...&key=AIza...
    (
        re.compile(r"\b((?:code|key|access_token|refresh_token|client_secret)=)[^&\s\"']+"),
        rf"\1{REDACTED}",
    ),
    (
        re.compile(r"-----BEGIN [A-Z ]+-----.*?-----END [A-Z ]+-----", re.DOTALL),
        REDACTED,
    ),
)

# Atributos de `extra` que nunca devem sair com valor.
SECRET_RECORD_FIELDS: Final = frozenset(
    {
        "access_token",
        "auth_code",
        "client_secret",
        "developer_key",
        "private_key",
        "refresh_token",
    }
)


def redact_secrets(text: str) -> str:
    """Mascara credenciais conhecidas em texto livre.

    Exemplos:
        >>> redact_secrets('{"token": "ya29.a0", "expiry": "2026-01-01"}')
        '{"token": "[REDACTED]", "expiry": "2026-01-01"}'

        >>> redact_secrets("POST /token code=4/0AbCd&grant_type=authorization_code")
        'POST /token code=[REDACTED]&grant_type=authorization_code'
    """
    if not text:
        return text
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class CorrelationIdFilter(logging.Filter):
    """Preenche `correlation_id` com o valor do contexto atual.

    Um correlation_id passado explicitamente via `extra` e preservado.
    """

    def __init__(self, correlation_id_getter: Callable[[], str] | None = None) -> None:
        super().__init__()
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        return True


class CredentialRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_secrets(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_secrets(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        for field in SECRET_RECORD_FIELDS.intersection(record.__dict__):
            setattr(record, field, REDACTED)
        return True
