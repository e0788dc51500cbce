"""Handle autenticado para chamadas a Google Calendar API.

Cada handle pertence a uma estrategia de acesso e embrulha as credenciais
do google-auth (ou a API key, na estrategia basica). O recurso de servico
do googleapiclient e construido sob demanda e descartado quando as
credenciais mudam.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials as UserCredentials
from googleapiclient.discovery import build
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from gcal_wrapper.domain.access import AccessStrategy
from gcal_wrapper.observability import get_correlation_id
from utils.errors import AuthenticationRequiredError, RemoteServiceError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from google.auth.credentials import Credentials
    from google_auth_oauthlib.flow import Flow
    from googleapiclient.discovery import Resource

logger = logging.getLogger(__name__)

_COMPONENT = "google_calendar_handle"


class GoogleClientHandle:
    """Cliente autenticado sob uma estrategia de acesso especifica."""

    __slots__ = (
        "_credentials",
        "_developer_key",
        "_flow",
        "_service",
        "application_name",
        "scopes",
        "strategy",
    )

    def __init__(
        self,
        *,
        strategy: AccessStrategy,
        application_name: str,
        scopes: Sequence[str],
        credentials: Credentials | None = None,
        developer_key: str | None = None,
        flow: Flow | None = None,
    ) -> None:
        self.strategy = strategy
        self.application_name = application_name
        self.scopes = tuple(scopes)
        self._credentials = credentials
        self._developer_key = developer_key
        self._flow = flow
        self._service: Resource | None = None

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    def service(self) -> Resource:
        """Recurso `calendar v3` ligado as credenciais atuais."""
        if self._service is None:
            kwargs: dict[str, Any] = {"cache_discovery": False}
            if self._credentials is not None:
                kwargs["credentials"] = self._credentials
            if self._developer_key:
                kwargs["developerKey"] = self._developer_key
            self._service = build("calendar", "v3", **kwargs)
            logger.debug(
                "google_calendar_service_built",
                extra={
                    "component": _COMPONENT,
                    "strategy": self.strategy.value,
                    "application_name": self.application_name,
                    "correlation_id": get_correlation_id(),
                },
            )
        return self._service

    # ------------------------------------------------------------------
    # OAuth do usuario (estrategia USER_DELEGATED)
    # ------------------------------------------------------------------

    def create_auth_url(self) -> str:
        flow = self._require_flow()
        url, _state = flow.authorization_url(access_type="offline", prompt="consent")
        return url

    def authenticate(self, auth_code: str) -> str:
        """Troca o codigo de autorizacao por um token de usuario (JSON).

        O token nao fica anexado a este handle; use `for_user` para
        obter um handle com as credenciais do usuario.
        """
        flow = self._require_flow()
        try:
            flow.fetch_token(code=auth_code)
        except OAuth2Error as exc:
            raise RemoteServiceError(f"oauth_code_exchange_failed: {exc.error}") from exc
        except (Warning, OSError) as exc:
            # oauthlib sinaliza escopo concedido diferente do pedido com Warning.
            raise RemoteServiceError(f"oauth_code_exchange_failed: {exc}") from exc
        return flow.credentials.to_json()

    def for_user(self, access_token: str) -> GoogleClientHandle:
        """Novo handle, fora do cache, com as credenciais de um unico usuario."""
        handle = GoogleClientHandle(
            strategy=self.strategy,
            application_name=self.application_name,
            scopes=self.scopes,
        )
        handle.set_access_token(access_token)
        return handle

    def set_access_token(self, access_token: str) -> None:
        try:
            info = json.loads(access_token)
        except ValueError as exc:
            raise AuthenticationRequiredError("Token de acesso invalido") from exc
        if not isinstance(info, dict):
            raise AuthenticationRequiredError("Token de acesso invalido")
        try:
            credentials = UserCredentials.from_authorized_user_info(info, list(self.scopes))
        except ValueError as exc:
            raise AuthenticationRequiredError("Token de acesso incompleto") from exc
        self._attach(credentials)

    def is_access_token_expired(self) -> bool:
        credentials = self._credentials
        return credentials is None or not credentials.valid

    def refresh_token(self) -> str:
        """Renova o token com o refresh token embutido e retorna o novo token."""
        credentials = self._credentials
        if not isinstance(credentials, UserCredentials) or not credentials.refresh_token:
            raise AuthenticationRequiredError("Token expirado sem refresh token")
        try:
            credentials.refresh(Request())
        except (GoogleAuthError, OSError) as exc:
            raise RemoteServiceError(f"oauth_refresh_failed: {exc}") from exc
        self._service = None
        return credentials.to_json()

    def _attach(self, credentials: Credentials) -> None:
        self._credentials = credentials
        self._service = None

    def _require_flow(self) -> Flow:
        if self._flow is None:
            raise AuthenticationRequiredError(
                f"Handle {self.strategy.value} nao suporta fluxo OAuth"
            )
        return self._flow
