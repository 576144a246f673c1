"""Persistence services on top of :class:`DatabaseManager`."""

from .matches import MatchRepository

__all__ = ["MatchRepository"]
