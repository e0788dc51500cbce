"""Modelos de dominio do gateway de calendario."""

from gcal_wrapper.domain.access import (
    AccessStrategy,
    AclRule,
    build_owner_rule,
    build_reader_rule,
)
from gcal_wrapper.domain.calendar_event import CalendarEvent, TimeKind

__all__ = [
    "AccessStrategy",
    "AclRule",
    "CalendarEvent",
    "TimeKind",
    "build_owner_rule",
    "build_reader_rule",
]
