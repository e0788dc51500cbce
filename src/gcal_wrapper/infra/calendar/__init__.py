"""Integracao concreta com Google Calendar API v3."""

from __future__ import annotations

from gcal_wrapper.infra.calendar.client_handle import GoogleClientHandle
from gcal_wrapper.infra.calendar.credential_resolver import (
    REQUIRED_FIELDS,
    CredentialResolver,
    missing_fields,
    select_strategy,
)
from gcal_wrapper.infra.calendar.google_calendar_gateway import GoogleCalendarGateway

__all__ = [
    "REQUIRED_FIELDS",
    "CredentialResolver",
    "GoogleCalendarGateway",
    "GoogleClientHandle",
    "missing_fields",
    "select_strategy",
]
