"""Instalacao do logging JSON no logger raiz."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, CredentialRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import TextIO

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "gcal_wrapper"

# Transporte HTTP e fluxo OAuth: ruidosos em INFO/DEBUG e, no caso do
# oauthlib, com corpos de requisicao de token.
QUIET_LOGGERS = (
    "googleapiclient.discovery_cache",
    "google_auth_httplib2",
    "oauthlib",
    "requests_oauthlib",
    "urllib3",
)


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Substitui os handlers do logger raiz por um unico handler JSON.

    Deve ser chamada uma vez, pela aplicacao hospedeira.

    Args:
        level: Nivel de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Valor fixo do campo `service`.
        correlation_id_getter: Funcao que retorna o correlation_id atual.
        stream: Destino do handler; padrao stderr.

    Returns:
        O handler instalado.

    Raises:
        ValueError: Se o nivel de log for invalido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(stream)
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter(service_name))
    handler.addFilter(CorrelationIdFilter(correlation_id_getter))
    handler.addFilter(CredentialRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
