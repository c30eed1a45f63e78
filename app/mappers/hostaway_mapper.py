import logging
import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from app.schemas.reviews import Review

logger = logging.getLogger(__name__)

CHANNEL = "hostaway"

_TRUE_STRINGS = frozenset({"true", "1", "yes"})


def canonical_id(value: Any) -> str | None:
    """Render a provider or path id as one comparable string.

    Numeric strings are read as numbers and integral numbers lose their
    decimal part, so 7, 7.0, "7", "7.0" and "07" are equal.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)

    text = str(value).strip()
    if not text:
        return None
    try:
        return str(int(text))
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return text
    return canonical_id(number) if math.isfinite(number) else text


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _category_entries(raw: dict[str, Any]) -> list[dict[str, Any]]:
    categories = raw.get("reviewCategory")
    if not isinstance(categories, list):
        return []
    return [c for c in categories if isinstance(c, dict) and c.get("category") is not None]


def round_rating(value: float) -> float:
    """Round to one decimal, halves away from zero on the exact value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def category_ratings(raw: dict[str, Any]) -> dict[str, float | None]:
    """Map category name to rating. Later duplicates overwrite earlier ones."""
    return {
        str(entry["category"]): _as_number(entry.get("rating"))
        for entry in _category_entries(raw)
    }


def overall_rating(raw: dict[str, Any]) -> float | None:
    """Explicit rating, else the category mean, else None.

    A zero rating counts as missing. The mean only covers categories that
    carry a numeric rating.
    """
    rating = _as_number(raw.get("rating"))
    if rating:
        return rating

    ratings = [
        r for r in (_as_number(e.get("rating")) for e in _category_entries(raw))
        if r is not None
    ]
    if not ratings:
        return None

    average = round_rating(sum(ratings) / len(ratings))
    return average or None


def parse_submitted_at(value: Any) -> str | None:
    """Convert a provider timestamp to ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (UTC).

    Naive timestamps are taken as UTC. Numbers are epoch milliseconds.
    Returns None when the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        else:
            parsed = datetime.fromisoformat(str(value).strip())
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        stamp = parsed.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    except (ValueError, OverflowError, OSError):
        return None

    return stamp.replace("+00:00", "Z")


def normalize_hostaway(raw: dict[str, Any]) -> Review:
    """Map one Hostaway review record to the canonical Review.

    Never raises: missing or malformed fields degrade to None/empty.
    """
    if not isinstance(raw, dict):
        raw = {}

    submitted_at = parse_submitted_at(raw.get("submittedAt"))
    if submitted_at is None:
        logger.warning(
            "Review %s has an unparsable submittedAt: %r",
            raw.get("id"), raw.get("submittedAt"),
        )

    return Review(
        id=canonical_id(raw.get("id")),
        channel=CHANNEL,
        property=_as_text(raw.get("listingName")),
        reviewer=_as_text(raw.get("guestName")),
        type=_as_text(raw.get("type")),
        status=_as_text(raw.get("status")),
        ratingOverall=overall_rating(raw),
        ratingsByCategory=category_ratings(raw),
        text=_as_text(raw.get("publicReview")),
        submittedAt=submitted_at,
        publicDisplay=_as_flag(raw.get("PublicDisplayStatus")),
    )
