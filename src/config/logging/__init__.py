"""Logging estruturado em JSON para o gateway.

Uso:
    import logging

    from config.logging import configure_logging

    configure_logging(level="INFO", service_name="gcal_wrapper")
    logging.getLogger(__name__).info(
        "google_calendar_write_ok", extra={"action": "create_calendar"}
    )

Todo record sai com correlation_id e service; tokens, secrets e chaves
sao mascarados antes da formatacao.
"""

from config.logging.config import QUIET_LOGGERS, configure_logging
from config.logging.filters import (
    REDACTED,
    SECRET_RECORD_FIELDS,
    CorrelationIdFilter,
    CredentialRedactionFilter,
    redact_secrets,
)
from config.logging.formatters import FIELD_RENAME_MAP, LOG_FIELDS, create_json_formatter

__all__ = [
    "FIELD_RENAME_MAP",
    "LOG_FIELDS",
    "QUIET_LOGGERS",
    "REDACTED",
    "SECRET_RECORD_FIELDS",
    "CorrelationIdFilter",
    "CredentialRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "redact_secrets",
]
