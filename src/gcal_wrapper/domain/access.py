"""Estrategias de acesso e regras de ACL do Google Calendar."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AccessStrategy(str, Enum):
    """Modos fixos de autenticacao/autorizacao contra a API.

    BASIC: leitura de calendarios publicos via API key.
    ADVANCED: service account, leitura e escrita nos calendarios do servico.
    USER_DELEGATED: token OAuth do usuario final, leitura e escrita em nome dele.
    """

    BASIC = "basic"
    ADVANCED = "advanced"
    USER_DELEGATED = "user_delegated"


AclScopeType = Literal["default", "user", "group", "domain"]


class AclRule(BaseModel):
    """Regra de ACL aplicada a um calendario recem-criado."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    role: Literal["none", "freeBusyReader", "reader", "writer", "owner"] = Field(
        ...,
        description="Papel concedido pela regra.",
    )
    scope_type: AclScopeType = Field(..., description="Tipo de escopo da regra.")
    scope_value: str | None = Field(
        default=None,
        description="Identidade do escopo; ausente para o escopo default.",
    )


def build_reader_rule() -> AclRule:
    """Qualquer pessoa pode ler o calendario."""
    return AclRule(role="reader", scope_type="default")


def build_owner_rule(owner: str) -> AclRule:
    """Dono com todas as permissoes sobre o calendario."""
    return AclRule(role="owner", scope_type="user", scope_value=owner)


__all__ = [
    "AccessStrategy",
    "AclRule",
    "AclScopeType",
    "build_owner_rule",
    "build_reader_rule",
]
