"""
Database Module
SQLAlchemy Schema und Database Manager
"""

from .manager import DatabaseManager
from .schema import Base, MatchRecord

__all__ = [
    "DatabaseManager",
    "Base",
    "MatchRecord",
]
