import math
import re
from datetime import datetime

# Date formats seen in exports and hand-written sample files
DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%d.%m.%Y",
    "%d/%m/%Y",
    "%b %d, %Y",
    "%d %b %Y",
]


def clean_text(s: str | None) -> str | None:
    if s is None:
        return None
    s = re.sub(r"\s+", " ", str(s).strip())
    return s or None


def parse_score(value) -> int:
    """Coerce a raw score to a non-negative int; anything unparsable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(round(number)))


def parse_date(s: str | None) -> datetime | None:
    if not s:
        return None
    s = clean_text(s)
    try:
        # ISO strings incl. offsets ("2024-01-01T18:00:00Z")
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None
