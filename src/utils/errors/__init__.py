"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationRequiredError,
    CredentialLoadError,
    GoogleCalendarError,
    InsufficientConfigurationError,
    NoCalendarsConfiguredError,
    RemoteServiceError,
    ServiceNotInitializedError,
)

__all__ = [
    "AuthenticationRequiredError",
    "CredentialLoadError",
    "GoogleCalendarError",
    "InsufficientConfigurationError",
    "NoCalendarsConfiguredError",
    "RemoteServiceError",
    "ServiceNotInitializedError",
]
