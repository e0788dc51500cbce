"""Gerenciamento de correlation_id para rastreamento de chamadas.

O correlation_id e injetado nos logs do gateway e dos handles.
Usa ContextVar para ser thread-safe.

Uso:
    from gcal_wrapper.observability import get_correlation_id, set_correlation_id

    token = set_correlation_id(request_id)
    try:
        gateway.list_upcoming(10)
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ou string vazia."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or str(uuid.uuid4())
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
