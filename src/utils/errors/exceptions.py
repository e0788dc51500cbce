"""Exceções do gateway de Google Calendar.

Todas as mensagens sao seguras para log: nomeiam campos e estrategias,
nunca valores de credenciais.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class GoogleCalendarError(RuntimeError):
    """Base para falhas do gateway de calendario."""


class InsufficientConfigurationError(GoogleCalendarError):
    """Configuracao sem os campos exigidos pela estrategia de acesso."""

    def __init__(self, strategy: str | None, missing_fields: Iterable[str]) -> None:
        self.strategy = strategy
        self.missing_fields = tuple(missing_fields)
        target = f"estrategia {strategy}" if strategy else "qualquer estrategia"
        super().__init__(
            f"Configuracao insuficiente para {target}; "
            f"campos ausentes: {', '.join(self.missing_fields) or '-'}"
        )


class CredentialLoadError(GoogleCalendarError):
    """Arquivo de chave privada ilegivel ou vazio."""


class ServiceNotInitializedError(GoogleCalendarError):
    """Operacao de escrita sem a estrategia avancada configurada."""


class AuthenticationRequiredError(GoogleCalendarError):
    """Nao foi possivel obter token de acesso para a estrategia pedida."""


class NoCalendarsConfiguredError(GoogleCalendarError):
    """Operacao sobre a lista estatica de calendarios sem calendar_ids."""


class RemoteServiceError(GoogleCalendarError):
    """Falha repassada do servico remoto, sem interpretacao nem retry."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
