"""Agregador de settings do gcal-wrapper.

Re-exporta as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.calendar import (
    GoogleCalendarSettings,
    get_google_calendar_settings,
)

__all__ = [
    "GoogleCalendarSettings",
    "get_google_calendar_settings",
]
