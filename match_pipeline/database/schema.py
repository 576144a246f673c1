"""
Database Schema
SQLAlchemy Models für die Match-Datenbank
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class MatchRecord(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True)
    # Nullable: rows written before sports were introduced carry no sport until migrated
    sport = Column(String(20), nullable=True)
    team_a = Column(String(200), nullable=False)
    team_b = Column(String(200), nullable=False)
    score_a = Column(Integer, nullable=False, default=0, server_default="0")
    score_b = Column(Integer, nullable=False, default=0, server_default="0")
    form = Column(Text, default="", server_default="")
    risk = Column(Text, default="", server_default="")
    date = Column(DateTime, default=func.now())
    created_at = Column(DateTime, default=func.now(), server_default=func.now())

    __table_args__ = (
        Index("ix_matches_sport_date", "sport", "date"),
    )
