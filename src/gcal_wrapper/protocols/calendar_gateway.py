"""Contrato do gateway de calendario.

Mantemos apenas o protocolo aqui para que consumidores possam trocar o
gateway real por um fake sem depender do Google.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime

    from gcal_wrapper.domain.access import AccessStrategy
    from gcal_wrapper.domain.calendar_event import CalendarEvent


@runtime_checkable
class CalendarGatewayProtocol(Protocol):
    """Operacoes de leitura e escrita sobre calendarios e eventos."""

    def list_events(
        self,
        calendar_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        max_results: int | None = None,
        *,
        access: AccessStrategy | str | None = None,
    ) -> list[CalendarEvent]:
        """Lista eventos de um calendario em ordem crescente de inicio."""
        ...

    def list_upcoming(self, max_results: int, *, now: datetime | None = None) -> list[CalendarEvent]:
        """Proximos eventos de todos os calendarios configurados."""
        ...

    def list_upcoming_grouped_by_day(
        self,
        max_results: int,
        *,
        now: datetime | None = None,
    ) -> dict[date | None, list[CalendarEvent]]:
        """Proximos eventos agrupados pela data de inicio."""
        ...

    def create_calendar(self, summary: str) -> str:
        """Cria calendario e retorna o ID."""
        ...

    def delete_calendar(self, calendar_id: str) -> None:
        """Remove calendario."""
        ...

    def create_time_off_event(
        self,
        calendar_id: str,
        summary: str,
        start_date: date,
        end_date: date,
        attendees: Iterable[str] = (),
        access: AccessStrategy | str | None = ...,
    ) -> str:
        """Cria evento de folga e retorna o ID."""
        ...

    def update_time_off_event(
        self,
        calendar_id: str,
        event_id: str,
        summary: str,
        start_date: date,
        end_date: date,
        attendees: Iterable[str] = (),
        access: AccessStrategy | str | None = ...,
    ) -> str:
        """Atualiza evento de folga e retorna o mesmo ID."""
        ...

    def delete_time_off_event(
        self,
        calendar_id: str,
        event_id: str,
        access: AccessStrategy | str | None = ...,
    ) -> None:
        """Remove evento de folga."""
        ...
