from __future__ import annotations

from enum import Enum
from typing import Optional


class Sport(str, Enum):
    FOOTBALL = "football"
    BASKETBALL = "basketball"
    TENNIS = "tennis"
    RUGBY = "rugby"
    HANDBALL = "handball"


DEFAULT_SPORT: str = Sport.FOOTBALL.value

# Ordered as declared; the UI and the all-sports statistics follow this order
SPORT_VALUES: tuple[str, ...] = tuple(s.value for s in Sport)

SPORT_LABELS: dict[str, str] = {
    Sport.FOOTBALL.value: "Football",
    Sport.BASKETBALL.value: "Basketball",
    Sport.TENNIS.value: "Tennis",
    Sport.RUGBY.value: "Rugby",
    Sport.HANDBALL.value: "Handball",
}


class UnknownSportError(ValueError):
    """Raised for a non-empty sport value outside the supported set."""

    def __init__(self, value: object):
        self.value = value
        self.supported = list(SPORT_VALUES)
        super().__init__(
            f"Unknown sport '{value}'. Allowed: {', '.join(self.supported)}"
        )


def normalize_sport(
    value: str | Sport | None, fallback: Optional[str] = DEFAULT_SPORT
) -> Optional[str]:
    """
    Normalize a sport identifier to its canonical lowercase value.

    Empty or missing input yields ``fallback``; a non-empty value that is not a
    supported sport yields ``None`` so the caller can reject it.
    """
    if isinstance(value, Sport):
        return value.value
    if value is None:
        return fallback
    v = str(value).strip().lower()
    if not v:
        return fallback
    return v if v in SPORT_VALUES else None


def require_sport(value: str | Sport | None, fallback: Optional[str] = DEFAULT_SPORT) -> Optional[str]:
    """Like :func:`normalize_sport` but raises :class:`UnknownSportError` instead of returning None."""
    sport = normalize_sport(value, fallback)
    if sport is None and value is not None and str(value).strip():
        raise UnknownSportError(value)
    return sport


def sport_choices() -> list[dict[str, str]]:
    return [{"id": s, "label": SPORT_LABELS[s]} for s in SPORT_VALUES]
