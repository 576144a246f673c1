"""
Domain models for validated match data using Pydantic.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from match_pipeline.common.parsing import clean_text, parse_date
from match_pipeline.common.sports import UnknownSportError, normalize_sport
from match_pipeline.core import config

Number = Union[int, float]


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the TIMESTAMP column of the store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Match(BaseModel):
    """A single match record.

    Field names are snake_case; the camelCase aliases (``teamA``, ``scoreB``, ...)
    are the wire and sample-file shape and are accepted on input as well.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    sport: str = Field(default_factory=lambda: config.settings.default_sport)
    team_a: str = Field(alias="teamA")
    team_b: str = Field(alias="teamB")
    score_a: Number = Field(default=0, alias="scoreA")
    score_b: Number = Field(default=0, alias="scoreB")
    form: str = ""
    risk: str = ""
    date: datetime = Field(default_factory=utcnow)

    @field_validator("sport", mode="before")
    @classmethod
    def _normalize_sport(cls, v):
        sport = normalize_sport(v, fallback=config.settings.default_sport)
        if sport is None:
            raise UnknownSportError(v)
        return sport

    @field_validator("team_a", "team_b", mode="before")
    @classmethod
    def _clean_team(cls, v):
        name = clean_text(v) if v is not None else None
        if not name:
            raise ValueError("team identifier must not be empty")
        return name

    @field_validator("score_a", "score_b", mode="before")
    @classmethod
    def _default_score(cls, v):
        return 0 if v is None or v == "" else v

    @field_validator("score_a", "score_b")
    @classmethod
    def _whole_non_negative(cls, v):
        if not math.isfinite(v):
            raise ValueError("score must be a finite number")
        if v < 0:
            raise ValueError("score must be non-negative")
        # INTEGER column
        return int(round(v))

    @field_validator("form", "risk", mode="before")
    @classmethod
    def _default_text(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        if v is None or v == "":
            return utcnow()
        if isinstance(v, str):
            parsed = parse_date(v)
            if parsed is None:
                raise ValueError(f"unparsable date '{v}'")
            v = parsed
        if isinstance(v, datetime) and v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    def to_record(self) -> dict:
        """Wire representation (camelCase keys, ISO date)."""
        return self.model_dump(mode="json", by_alias=True)


class SportStats(BaseModel):
    """Descriptive statistics over one sport's matches. Rates are fractions in [0, 1]."""

    sample_size: int = 0
    avg_combined_score: float = 0
    side_a_win_rate: float = 0
    draw_rate: float = 0


class AllSportsStats(BaseModel):
    mode: Literal["all_sports"] = "all_sports"
    sample_size: int = 0
    by_sport: dict[str, SportStats] = Field(default_factory=dict)
