"""Helpers internos de parsing para respostas da Google Calendar API."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from gcal_wrapper.domain.calendar_event import CalendarEvent, TimeKind

if TYPE_CHECKING:
    from collections.abc import Iterable
    from zoneinfo import ZoneInfo

    from googleapiclient.errors import HttpError

    from gcal_wrapper.domain.access import AclRule

DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"

# https://drive.google.com/file/d/FILE_ID/edit?usp=sharing
_DRIVE_FILE_ID = re.compile(r"file/d/([^/]+)/")

# No Google Calendar a data final de eventos de dia inteiro e exclusiva.
_ALL_DAY_END_OFFSET = timedelta(days=1)


def map_calendar_event(payload: dict[str, Any], zone: ZoneInfo) -> CalendarEvent:
    start_kind, start_time = _extract_event_time(payload.get("start"), zone)
    end_kind, end_time = _extract_event_time(payload.get("end"), zone)
    if end_kind is TimeKind.DATE_ONLY and end_time is not None:
        end_time -= _ALL_DAY_END_OFFSET
    return CalendarEvent(
        summary=payload.get("summary"),
        description=payload.get("description"),
        location=payload.get("location"),
        start_time_kind=start_kind,
        start_time=start_time,
        end_time_kind=end_kind,
        end_time=end_time,
        image_url=extract_image_url(payload.get("attachments")),
    )


def extract_image_url(attachments: Any) -> str | None:
    """Converte o link de visualizacao do primeiro anexo em link de download."""
    if not isinstance(attachments, list) or not attachments:
        return None
    first = attachments[0]
    url = first.get("fileUrl") if isinstance(first, dict) else None
    if not isinstance(url, str):
        return None
    match = _DRIVE_FILE_ID.search(url)
    if match is None:
        return None
    return DRIVE_DOWNLOAD_URL.format(file_id=match.group(1))


def build_time_off_body(
    summary: str,
    start_date: date,
    end_date: date,
    attendees: Iterable[str] = (),
) -> dict[str, Any]:
    """Monta o corpo de um evento de dia inteiro; `end_date` e inclusivo."""
    body: dict[str, Any] = {
        "summary": summary,
        "start": {"date": _as_date(start_date).isoformat()},
        "end": {"date": (_as_date(end_date) + _ALL_DAY_END_OFFSET).isoformat()},
    }
    emails = [email for email in attendees if email]
    if emails:
        body["attendees"] = [{"email": email} for email in emails]
    return body


def build_calendar_body(summary: str, time_zone: str) -> dict[str, Any]:
    return {"summary": summary, "timeZone": time_zone}


def build_acl_rule_body(rule: AclRule) -> dict[str, Any]:
    scope: dict[str, Any] = {"type": rule.scope_type}
    if rule.scope_value is not None:
        scope["value"] = rule.scope_value
    return {"role": rule.role, "scope": scope}


def format_rfc3339(value: datetime, zone: ZoneInfo) -> str:
    """A API rejeita timeMin/timeMax sem offset; datas ingenuas recebem `zone`."""
    aware = value.replace(tzinfo=zone) if value.tzinfo is None else value
    return aware.isoformat()


def parse_google_datetime(value: Any, zone: ZoneInfo) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=zone) if parsed.tzinfo is None else parsed.astimezone(zone)


def http_status(exc: HttpError) -> int | None:
    response = getattr(exc, "resp", None)
    return int(response.status) if response and getattr(response, "status", None) else None


def _extract_event_time(value: Any, zone: ZoneInfo) -> tuple[TimeKind | None, datetime | None]:
    if not isinstance(value, dict):
        return None, None
    if parsed := parse_google_datetime(value.get("dateTime"), zone):
        return TimeKind.DATE_AND_TIME, parsed
    raw_date = value.get("date")
    if not isinstance(raw_date, str) or not raw_date.strip():
        return None, None
    try:
        day = date.fromisoformat(raw_date.strip())
    except ValueError:
        return None, None
    return TimeKind.DATE_ONLY, datetime(day.year, day.month, day.day, tzinfo=zone)


def _as_date(value: date) -> date:
    # datetime herda de date; descartamos a hora para nao vazar para o payload.
    return value.date() if isinstance(value, datetime) else value
