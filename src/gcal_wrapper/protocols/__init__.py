"""Protocolos e contratos do gateway."""

from .calendar_gateway import CalendarGatewayProtocol

__all__ = ["CalendarGatewayProtocol"]
