"""Messaging transports."""

from .base import Transport
from .console import ConsoleTransport

__all__ = ["ConsoleTransport", "Transport"]
