"""Endpoints module."""

from .endpoints import Receiver, Sender

__all__ = ["Receiver", "Sender"]
