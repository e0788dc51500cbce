"""Settings de integracao com Google Calendar.

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pela aplicacao. `to_config()` gera o dicionario plano consumido pelo
gateway, apenas com os campos preenchidos.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GoogleCalendarSettings(BaseModel):
    """Configuracoes de credenciais e calendarios do Google Calendar."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    application_name: str | None = Field(
        default=None,
        description="Nome da aplicacao registrada no Google Cloud.",
    )
    developer_key: str | None = Field(
        default=None,
        description="API key para leitura de calendarios publicos.",
    )
    calendar_ids: tuple[str, ...] = Field(
        default=(),
        description="Lista estatica de calendarios usada nos proximos eventos.",
    )
    client_id: str | None = Field(default=None, description="Client ID da service account.")
    oauth_client_id: str | None = Field(default=None, description="Client ID do app OAuth.")
    client_public_key: str | None = Field(
        default=None,
        description="Chave publica (client secret) da service account.",
    )
    client_email: str | None = Field(default=None, description="Email da service account.")
    client_private_key_file: str | None = Field(
        default=None,
        description="Caminho do arquivo de chave privada da service account.",
    )
    client_auth_config_file: str | None = Field(
        default=None,
        description="Caminho do client_secrets.json do app OAuth.",
    )
    calendar_owner: str | None = Field(
        default=None,
        description="Email que recebe papel de dono nos calendarios criados.",
    )
    oauth_redirect_uri: str | None = Field(
        default=None,
        description="Redirect URI do fluxo OAuth; padrao e o primeiro do client_secrets.",
    )
    timezone: str = Field(
        default="UTC",
        description="Timezone usado para normalizar horarios e datas locais.",
    )

    @field_validator("calendar_ids", mode="before")
    @classmethod
    def _split_calendar_ids(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(item.strip() for item in value.split(",") if item.strip())
        return value

    def to_config(self) -> dict[str, Any]:
        """Dicionario de configuracao sem campos vazios."""
        return {
            key: value
            for key, value in self.model_dump().items()
            if value not in (None, "", ())
        }


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _load_google_calendar_from_env() -> GoogleCalendarSettings:
    """Carrega GoogleCalendarSettings a partir de variaveis de ambiente."""
    return GoogleCalendarSettings(
        application_name=_read_optional_env("GOOGLE_CALENDAR_APPLICATION_NAME"),
        developer_key=_read_optional_env("GOOGLE_CALENDAR_DEVELOPER_KEY"),
        calendar_ids=os.getenv("GOOGLE_CALENDAR_IDS", ""),
        client_id=_read_optional_env("GOOGLE_CALENDAR_CLIENT_ID"),
        oauth_client_id=_read_optional_env("GOOGLE_CALENDAR_OAUTH_CLIENT_ID"),
        client_public_key=_read_optional_env("GOOGLE_CALENDAR_CLIENT_PUBLIC_KEY"),
        client_email=_read_optional_env("GOOGLE_CALENDAR_CLIENT_EMAIL"),
        client_private_key_file=_read_optional_env("GOOGLE_CALENDAR_CLIENT_PRIVATE_KEY_FILE"),
        client_auth_config_file=_read_optional_env("GOOGLE_CALENDAR_CLIENT_AUTH_CONFIG_FILE"),
        calendar_owner=_read_optional_env("GOOGLE_CALENDAR_OWNER"),
        oauth_redirect_uri=_read_optional_env("GOOGLE_CALENDAR_OAUTH_REDIRECT_URI"),
        timezone=os.getenv("GOOGLE_CALENDAR_TIMEZONE", "UTC").strip() or "UTC",
    )


@lru_cache(maxsize=1)
def get_google_calendar_settings() -> GoogleCalendarSettings:
    """Retorna instancia cacheada de GoogleCalendarSettings."""
    return _load_google_calendar_from_env()


__all__ = ["GoogleCalendarSettings", "get_google_calendar_settings"]
