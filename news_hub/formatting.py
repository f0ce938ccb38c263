from __future__ import annotations

from datetime import datetime
import math
from typing import Any

DATE_UNAVAILABLE = "Date Unavailable"
DATE_FORMAT = "%b %d, %I:%M %p"


def confidence_label(confidence: Any) -> str:
    """Format a sentiment confidence in [0, 1] as a percentage.

    Values below half a percent show as N/A, except an explicit 0.

    Examples:
        >>> confidence_label(0.874)
        '87%'
        >>> confidence_label(0)
        '0%'
        >>> confidence_label(None)
        'N/A'
    """
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return "N/A"
    if not math.isfinite(confidence):
        return "N/A"
    if confidence >= 0.005:
        return f"{math.floor(confidence * 100 + 0.5)}%"
    if confidence == 0:
        return "0%"
    return "N/A"


def sentiment_badge(sentiment: str, confidence: Any) -> str:
    return f"{sentiment or 'Unknown'} ({confidence_label(confidence)})"


def format_published(value: Any, now: datetime | None = None) -> str:
    """Format a published timestamp for display.

    Missing values fall back to the current time; values that cannot be
    parsed as ISO 8601 give DATE_UNAVAILABLE.
    """
    if not value:
        return (now or datetime.now()).strftime(DATE_FORMAT)
    if not isinstance(value, str):
        return DATE_UNAVAILABLE
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return DATE_UNAVAILABLE
    return parsed.strftime(DATE_FORMAT)
