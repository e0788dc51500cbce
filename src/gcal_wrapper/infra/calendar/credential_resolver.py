"""Selecao de estrategia de acesso e construcao de handles autenticados.

A decisao de estrategia e uma funcao pura sobre o dicionario de
configuracao; a construcao dos handles acontece sob demanda e fica
memorizada por estrategia em cada instancia do resolver.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from google.oauth2 import service_account
from google_auth_oauthlib.flow import Flow

from gcal_wrapper.domain.access import (
    AccessStrategy,
    AclRule,
    build_owner_rule,
    build_reader_rule,
)
from gcal_wrapper.infra.calendar.client_handle import GoogleClientHandle
from gcal_wrapper.observability import get_correlation_id
from utils.errors import CredentialLoadError, InsufficientConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_COMPONENT = "google_calendar_credentials"

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
CALENDAR_READONLY_SCOPE = "https://www.googleapis.com/auth/calendar.readonly"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

REQUIRED_FIELDS: Mapping[AccessStrategy, tuple[str, ...]] = MappingProxyType(
    {
        AccessStrategy.BASIC: ("application_name", "developer_key"),
        AccessStrategy.ADVANCED: (
            "application_name",
            "client_id",
            "client_public_key",
            "client_email",
            "client_private_key_file",
            "calendar_owner",
        ),
        AccessStrategy.USER_DELEGATED: (
            "application_name",
            "oauth_client_id",
            "client_auth_config_file",
        ),
    }
)


def missing_fields(config: Mapping[str, Any], strategy: AccessStrategy) -> tuple[str, ...]:
    return tuple(field for field in REQUIRED_FIELDS[strategy] if not config.get(field))


def select_strategy(config: Mapping[str, Any]) -> AccessStrategy:
    """Escolhe a estrategia mais forte disponivel sem fazer IO.

    Raises:
        InsufficientConfigurationError: Se nem ADVANCED nem BASIC estao completos.
    """
    if not missing_fields(config, AccessStrategy.ADVANCED):
        return AccessStrategy.ADVANCED
    basic_missing = missing_fields(config, AccessStrategy.BASIC)
    if not basic_missing:
        return AccessStrategy.BASIC
    raise InsufficientConfigurationError(None, basic_missing)


class CredentialResolver:
    """Transforma a configuracao em handles autenticados, um por estrategia."""

    def __init__(self, config: Mapping[str, Any]) -> None:
        self._config = dict(config)
        self._handles: dict[AccessStrategy, GoogleClientHandle] = {}
        self._lock = threading.Lock()
        self._flow_lock = threading.Lock()
        self.default_strategy = select_strategy(self._config)
        self.reader_rule: AclRule | None = None
        self.owner_rule: AclRule | None = None
        if self.default_strategy is AccessStrategy.ADVANCED:
            self.get_handle(AccessStrategy.ADVANCED)
            self.reader_rule = build_reader_rule()
            self.owner_rule = build_owner_rule(str(self._config["calendar_owner"]))

    @property
    def has_advanced_service(self) -> bool:
        return self.default_strategy is AccessStrategy.ADVANCED

    def get_handle(self, strategy: AccessStrategy) -> GoogleClientHandle:
        """Retorna o handle memorizado da estrategia, construindo no primeiro uso."""
        handle = self._handles.get(strategy)
        if handle is not None:
            return handle
        with self._lock:
            handle = self._handles.get(strategy)
            if handle is None:
                handle = self._build_handle(strategy)
                self._handles[strategy] = handle
        return handle

    def get_auth_url(self) -> str:
        """URL da tela de consentimento OAuth para o usuario final."""
        return self.get_handle(AccessStrategy.USER_DELEGATED).create_auth_url()

    def acquire_access_token(
        self,
        current_token: str | None,
        auth_code: str | None = None,
    ) -> str | None:
        """Obtem um token valido para a estrategia USER_DELEGATED.

        Com `auth_code`, troca o codigo por um novo token. Com
        `current_token`, devolve o mesmo token se ainda valido ou um token
        renovado. Sem nenhum dos dois, devolve `current_token` sem IO.

        O handle memorizado guarda apenas o fluxo OAuth; credenciais de
        usuario vivem em handles descartaveis (ver `bind_user_token`).
        """
        if auth_code:
            flow_handle = self.get_handle(AccessStrategy.USER_DELEGATED)
            # O Flow guarda o token trocado na sessao compartilhada.
            with self._flow_lock:
                token = flow_handle.authenticate(auth_code)
            self._log_token_event("google_oauth_code_exchanged")
            return token
        if not current_token:
            return current_token
        handle = self.bind_user_token(current_token)
        if not handle.is_access_token_expired():
            return current_token
        token = handle.refresh_token()
        self._log_token_event("google_oauth_token_refreshed")
        return token

    def bind_user_token(self, access_token: str) -> GoogleClientHandle:
        """Handle USER_DELEGATED exclusivo de uma chamada, com o token informado.

        Raises:
            InsufficientConfigurationError: Sem configuracao OAuth.
            AuthenticationRequiredError: Token malformado.
        """
        return self.get_handle(AccessStrategy.USER_DELEGATED).for_user(access_token)

    def _build_handle(self, strategy: AccessStrategy) -> GoogleClientHandle:
        missing = missing_fields(self._config, strategy)
        if missing:
            raise InsufficientConfigurationError(strategy.value, missing)
        if strategy is AccessStrategy.BASIC:
            handle = GoogleClientHandle(
                strategy=strategy,
                application_name=self._config["application_name"],
                scopes=[CALENDAR_READONLY_SCOPE],
                developer_key=self._config["developer_key"],
            )
        elif strategy is AccessStrategy.ADVANCED:
            handle = GoogleClientHandle(
                strategy=strategy,
                application_name=self._config["application_name"],
                scopes=[CALENDAR_SCOPE],
                credentials=self._build_service_account_credentials(),
            )
        else:
            handle = GoogleClientHandle(
                strategy=strategy,
                application_name=self._config["application_name"],
                scopes=[CALENDAR_SCOPE],
                flow=self._build_oauth_flow(),
            )
        logger.debug(
            "google_calendar_handle_created",
            extra={
                "component": _COMPONENT,
                "strategy": strategy.value,
                "correlation_id": get_correlation_id(),
            },
        )
        return handle

    def _build_service_account_credentials(self) -> service_account.Credentials:
        key_path = Path(self._config["client_private_key_file"])
        try:
            private_key = key_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CredentialLoadError("Nao foi possivel abrir a chave privada do cliente") from exc
        if not private_key.strip():
            raise CredentialLoadError("Arquivo de chave privada do cliente esta vazio")

        # Aceita tanto a chave PEM isolada quanto o JSON completo da service account.
        if private_key.lstrip().startswith("{"):
            try:
                info = json.loads(private_key)
            except ValueError as exc:
                raise CredentialLoadError("JSON da service account invalido") from exc
        else:
            info = {"private_key": private_key}
        info = {
            "type": "service_account",
            "token_uri": GOOGLE_TOKEN_URI,
            **info,
            "client_email": self._config["client_email"],
            "client_id": self._config["client_id"],
        }
        try:
            return service_account.Credentials.from_service_account_info(
                info,
                scopes=[CALENDAR_SCOPE],
            )
        except ValueError as exc:
            raise CredentialLoadError("Chave privada do cliente invalida") from exc

    def _build_oauth_flow(self) -> Flow:
        config_path = Path(self._config["client_auth_config_file"])
        try:
            client_config = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CredentialLoadError("Arquivo de configuracao OAuth ilegivel") from exc
        section = _client_section(client_config)
        if section is None:
            raise CredentialLoadError("Arquivo de configuracao OAuth invalido")
        if section.get("client_id") != self._config["oauth_client_id"]:
            raise CredentialLoadError(
                "client_id do arquivo de configuracao OAuth difere de oauth_client_id"
            )

        uris = section.get("redirect_uris") or []
        redirect_uri = self._config.get("oauth_redirect_uri") or (uris[0] if uris else None)
        try:
            # Sem PKCE: a URL de consentimento e a troca do codigo podem
            # acontecer em processos diferentes, sem estado compartilhado.
            return Flow.from_client_config(
                client_config,
                scopes=[CALENDAR_SCOPE],
                redirect_uri=redirect_uri,
                autogenerate_code_verifier=False,
            )
        except ValueError as exc:
            raise CredentialLoadError("Arquivo de configuracao OAuth invalido") from exc

    def _log_token_event(self, event: str) -> None:
        logger.info(
            event,
            extra={
                "component": _COMPONENT,
                "strategy": AccessStrategy.USER_DELEGATED.value,
                "correlation_id": get_correlation_id(),
            },
        )


def _client_section(client_config: Any) -> dict[str, Any] | None:
    if not isinstance(client_config, dict):
        return None
    for client_type in ("web", "installed"):
        section = client_config.get(client_type)
        if isinstance(section, dict):
            return section
    return None
