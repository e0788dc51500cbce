"""Gateway concreto de Google Calendar.

Mapeia operacoes de calendario da aplicacao (listar proximos eventos,
gerenciar eventos de folga e calendarios) para chamadas autenticadas da
API v3 e normaliza as respostas em `CalendarEvent`.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from gcal_wrapper.domain.access import AccessStrategy
from gcal_wrapper.infra.calendar.credential_resolver import CredentialResolver
from gcal_wrapper.infra.calendar.google_calendar_parsers import (
    build_acl_rule_body,
    build_calendar_body,
    build_time_off_body,
    format_rfc3339,
    http_status,
    map_calendar_event,
)
from gcal_wrapper.observability import get_correlation_id
from utils.errors import (
    AuthenticationRequiredError,
    NoCalendarsConfiguredError,
    RemoteServiceError,
    ServiceNotInitializedError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gcal_wrapper.domain.calendar_event import CalendarEvent
    from gcal_wrapper.infra.calendar.client_handle import GoogleClientHandle

logger = logging.getLogger(__name__)

_COMPONENT = "google_calendar_gateway"
_NEW_CALENDAR_TIMEZONE = "UTC"
_DEFAULT_TIMEZONE = "UTC"

Access = AccessStrategy | str | None


class GoogleCalendarGateway:
    """Superficie publica de operacoes sobre o Google Calendar.

    A estrategia padrao e decidida na construcao: ADVANCED quando a
    configuracao da service account esta completa, senao BASIC. Operacoes
    de escrita exigem ADVANCED configurado, mesmo quando executadas com
    outra estrategia.

    Args:
        config: Dicionario plano de configuracao (ver `config.settings`).
        resolver: Resolver ja construido; por padrao um novo e criado a
            partir de `config`.
    """

    __slots__ = ("_calendar_ids", "_resolver", "_zone")

    def __init__(
        self,
        config: Mapping[str, Any],
        *,
        resolver: CredentialResolver | None = None,
    ) -> None:
        self._resolver = resolver or CredentialResolver(config)
        self._calendar_ids = tuple(config.get("calendar_ids") or ())
        self._zone = ZoneInfo(config.get("timezone") or _DEFAULT_TIMEZONE)

    @property
    def resolver(self) -> CredentialResolver:
        return self._resolver

    @property
    def calendar_ids(self) -> tuple[str, ...]:
        return self._calendar_ids

    # ------------------------------------------------------------------
    # Autenticacao do usuario final
    # ------------------------------------------------------------------

    def get_auth_url(self) -> str:
        return self._resolver.get_auth_url()

    def acquire_access_token(
        self,
        current_token: str | None,
        auth_code: str | None = None,
    ) -> str | None:
        return self._resolver.acquire_access_token(current_token, auth_code)

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------

    def list_events(
        self,
        calendar_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        max_results: int | None = None,
        *,
        access: Access = None,
    ) -> list[CalendarEvent]:
        """Lista eventos em ordem crescente de inicio, sem expandir recorrencias.

        Sem `access`, usa o handle da estrategia padrao.
        """
        params: dict[str, Any] = {"orderBy": "startTime", "singleEvents": True}
        if start_date is not None:
            params["timeMin"] = format_rfc3339(start_date, self._zone)
        if end_date is not None:
            params["timeMax"] = format_rfc3339(end_date, self._zone)
        if max_results:
            params["maxResults"] = max_results
        handle = self._default_handle() if access is None else self._handle_for(access)
        items = self._list_items(handle, calendar_id, params)
        return [map_calendar_event(item, self._zone) for item in items]

    def list_upcoming(
        self,
        max_results: int,
        *,
        now: datetime | None = None,
    ) -> list[CalendarEvent]:
        """Retorna os `max_results` proximos eventos de todos os calendarios configurados.

        Cada calendario e consultado com o mesmo limite global, o que
        garante que os `max_results` eventos mais cedo do conjunto estao
        entre os candidatos antes do corte final.
        """
        if not self._calendar_ids:
            raise NoCalendarsConfiguredError("Nenhum calendar_id configurado")
        if max_results <= 0:
            return []
        time_min = format_rfc3339(now or datetime.now(tz=UTC), self._zone)
        params = {
            "maxResults": max_results,
            "orderBy": "startTime",
            "singleEvents": True,
            "timeMin": time_min,
        }
        handle = self._default_handle()
        events: list[CalendarEvent] = []
        for calendar_id in self._calendar_ids:
            items = self._list_items(handle, calendar_id, params)
            events.extend(map_calendar_event(item, self._zone) for item in items)
        # sorted() e estavel: empates mantem a ordem relativa original.
        events = sorted(events, key=_start_sort_key)
        return events[:max_results]

    def list_upcoming_grouped_by_day(
        self,
        max_results: int,
        *,
        now: datetime | None = None,
    ) -> dict[date | None, list[CalendarEvent]]:
        """Agrupa os proximos eventos pela data local de inicio, na ordem em que aparecem."""
        grouped: dict[date | None, list[CalendarEvent]] = {}
        for event in self.list_upcoming(max_results, now=now):
            grouped.setdefault(event.start_date, []).append(event)
        return grouped

    # ------------------------------------------------------------------
    # Calendarios (somente ADVANCED)
    # ------------------------------------------------------------------

    def create_calendar(self, summary: str) -> str:
        """Cria um calendario em UTC, aplica as regras de leitor e dono e retorna o ID."""
        self._require_advanced()
        service = self._resolver.get_handle(AccessStrategy.ADVANCED).service()
        created = self._execute(
            service.calendars().insert(body=build_calendar_body(summary, _NEW_CALENDAR_TIMEZONE))
        )
        calendar_id = str(created["id"])
        for rule in (self._resolver.reader_rule, self._resolver.owner_rule):
            if rule is not None:
                self._execute(
                    service.acl().insert(calendarId=calendar_id, body=build_acl_rule_body(rule))
                )
        self._log_write("create_calendar", AccessStrategy.ADVANCED)
        return calendar_id

    def delete_calendar(self, calendar_id: str) -> None:
        self._require_advanced()
        service = self._resolver.get_handle(AccessStrategy.ADVANCED).service()
        self._execute(service.calendars().delete(calendarId=calendar_id))
        self._log_write("delete_calendar", AccessStrategy.ADVANCED)

    # ------------------------------------------------------------------
    # Eventos de folga (dia inteiro)
    # ------------------------------------------------------------------

    def create_time_off_event(
        self,
        calendar_id: str,
        summary: str,
        start_date: date,
        end_date: date,
        attendees: Iterable[str] = (),
        access: Access = AccessStrategy.ADVANCED,
    ) -> str:
        """Cria evento de dia inteiro; `end_date` e inclusivo. Retorna o ID do evento.

        `access` pode ser `AccessStrategy.ADVANCED` (padrao),
        `AccessStrategy.BASIC` ou o token OAuth de um usuario.
        """
        return self._upsert_time_off_event(
            calendar_id, None, summary, start_date, end_date, attendees, access
        )

    def update_time_off_event(
        self,
        calendar_id: str,
        event_id: str,
        summary: str,
        start_date: date,
        end_date: date,
        attendees: Iterable[str] = (),
        access: Access = AccessStrategy.ADVANCED,
    ) -> str:
        return self._upsert_time_off_event(
            calendar_id, event_id, summary, start_date, end_date, attendees, access
        )

    def delete_time_off_event(
        self,
        calendar_id: str,
        event_id: str,
        access: Access = AccessStrategy.ADVANCED,
    ) -> None:
        self._require_advanced()
        handle = self._handle_for(access)
        self._execute(handle.service().events().delete(calendarId=calendar_id, eventId=event_id))
        self._log_write("delete_time_off_event", handle.strategy)

    def _upsert_time_off_event(
        self,
        calendar_id: str,
        event_id: str | None,
        summary: str,
        start_date: date,
        end_date: date,
        attendees: Iterable[str],
        access: Access,
    ) -> str:
        self._require_advanced()
        handle = self._handle_for(access)
        body = build_time_off_body(summary, start_date, end_date, attendees)
        events = handle.service().events()
        if not event_id:
            created = self._execute(events.insert(calendarId=calendar_id, body=body))
            self._log_write("create_time_off_event", handle.strategy)
            return str(created["id"])
        self._execute(events.update(calendarId=calendar_id, eventId=event_id, body=body))
        self._log_write("update_time_off_event", handle.strategy)
        return event_id

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _require_advanced(self) -> None:
        if not self._resolver.has_advanced_service:
            raise ServiceNotInitializedError("Servico do Google Calendar nunca foi inicializado")

    def _default_handle(self) -> GoogleClientHandle:
        return self._resolver.get_handle(self._resolver.default_strategy)

    def _handle_for(self, access: Access) -> GoogleClientHandle:
        if isinstance(access, AccessStrategy) and access is not AccessStrategy.USER_DELEGATED:
            return self._resolver.get_handle(access)
        token = access if isinstance(access, str) and not isinstance(access, AccessStrategy) else None
        acquired = self._resolver.acquire_access_token(token)
        if not acquired:
            raise AuthenticationRequiredError("Nao foi possivel obter token de acesso")
        return self._resolver.bind_user_token(acquired)

    def _list_items(
        self,
        handle: GoogleClientHandle,
        calendar_id: str,
        params: dict[str, Any],
    ) -> list[dict[str, Any]]:
        response = self._execute(handle.service().events().list(calendarId=calendar_id, **params))
        items = response.get("items") if isinstance(response, dict) else None
        return [item for item in items or [] if isinstance(item, dict)]

    def _execute(self, request: Any) -> Any:
        try:
            return request.execute()
        except HttpError as exc:
            status_code = http_status(exc)
            raise RemoteServiceError(
                f"google_calendar_http_error: status={status_code}",
                status_code=status_code,
            ) from exc
        except GoogleAuthError as exc:
            raise RemoteServiceError(f"google_calendar_auth_error: {exc}") from exc
        except (httplib2.HttpLib2Error, OSError) as exc:
            raise RemoteServiceError(f"google_calendar_transport_error: {exc}") from exc

    def _log_write(self, action: str, strategy: AccessStrategy) -> None:
        logger.info(
            "google_calendar_write_ok",
            extra={
                "component": _COMPONENT,
                "action": action,
                "strategy": strategy.value,
                "correlation_id": get_correlation_id(),
            },
        )


def _start_sort_key(event: CalendarEvent) -> datetime:
    return event.start_time or datetime.max.replace(tzinfo=UTC)
