"""Formatter JSON dos logs do gateway."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de saida das chaves base; extras vem depois.
LOG_FIELDS = ("asctime", "levelname", "name", "message", "correlation_id")

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(service_name: str) -> JsonFormatter:
    """Formatter com as chaves base e `service` fixo em todo record.

    Exemplo de output:
        {"timestamp": "...", "level": "INFO", "logger": "gcal_wrapper.infra...",
         "message": "google_calendar_write_ok", "correlation_id": "abc-123",
         "service": "gcal_wrapper", "action": "create_calendar"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        static_fields={"service": service_name},
    )
