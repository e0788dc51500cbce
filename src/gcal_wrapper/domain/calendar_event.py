"""Modelo de leitura de eventos de calendario.

Eventos sao construidos apenas a partir da traducao de um evento remoto e
nunca sao alterados depois disso.
"""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TimeKind(str, Enum):
    """Indica se o horario do evento tem so a data ou data e hora."""

    DATE_ONLY = "date_only"
    DATE_AND_TIME = "date_and_time"


class CalendarEvent(BaseModel):
    """Evento normalizado a partir da resposta do Google Calendar."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    summary: str | None = Field(default=None, description="Titulo do evento.")
    description: str | None = Field(default=None, description="Descricao livre do evento.")
    location: str | None = Field(default=None, description="Local informado no evento.")
    start_time_kind: TimeKind | None = Field(
        default=None,
        description="Tipo do inicio; None quando o campo remoto nao existe.",
    )
    start_time: datetime | None = Field(default=None, description="Inicio do evento.")
    end_time_kind: TimeKind | None = Field(
        default=None,
        description="Tipo do fim; None quando o campo remoto nao existe.",
    )
    end_time: datetime | None = Field(
        default=None,
        description="Fim do evento. Para eventos de dia inteiro e o ultimo dia (inclusivo).",
    )
    image_url: str | None = Field(
        default=None,
        description="URL de download direto do primeiro anexo do Drive.",
    )

    @property
    def is_all_day(self) -> bool:
        return self.start_time_kind is TimeKind.DATE_ONLY

    @property
    def start_date(self) -> date | None:
        """Data local de inicio, usada no agrupamento por dia."""
        return self.start_time.date() if self.start_time is not None else None


__all__ = ["CalendarEvent", "TimeKind"]
