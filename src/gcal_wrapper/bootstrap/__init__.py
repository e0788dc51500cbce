"""Bootstrap: composition root do gateway.

Uso:
    from gcal_wrapper.bootstrap import initialize_logging, create_calendar_gateway

    initialize_logging()
    gateway = create_calendar_gateway()
    events = gateway.list_upcoming(10)
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from config.logging import configure_logging
from config.settings import get_google_calendar_settings
from gcal_wrapper.infra.calendar import GoogleCalendarGateway
from gcal_wrapper.observability import get_correlation_id

if TYPE_CHECKING:
    from config.settings import GoogleCalendarSettings

SERVICE_NAME = "gcal_wrapper"

DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def initialize_logging() -> None:
    """Configura logging JSON com correlation_id; nivel vem de LOG_LEVEL."""
    configure_logging(
        level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def create_calendar_gateway(
    settings: GoogleCalendarSettings | None = None,
) -> GoogleCalendarGateway:
    """Constroi o gateway a partir das settings (padrao: variaveis de ambiente).

    Raises:
        InsufficientConfigurationError: Se faltar configuracao para BASIC e ADVANCED.
        CredentialLoadError: Se a chave privada da service account nao puder ser lida.
    """
    resolved = settings or get_google_calendar_settings()
    gateway = GoogleCalendarGateway(resolved.to_config())
    logger.info(
        "google_calendar_gateway_created",
        extra={
            "component": "bootstrap",
            "strategy": gateway.resolver.default_strategy.value,
            "calendar_count": len(gateway.calendar_ids),
        },
    )
    return gateway


__all__ = ["SERVICE_NAME", "create_calendar_gateway", "initialize_logging"]
