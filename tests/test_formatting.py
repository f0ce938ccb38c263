from datetime import datetime

from news_hub.formatting import DATE_UNAVAILABLE, confidence_label, format_published, sentiment_badge


def test_confidence_label():
    assert confidence_label(0.874) == "87%"
    assert confidence_label(0.125) == "13%"
    assert confidence_label(1) == "100%"
    assert confidence_label(0) == "0%"
    assert confidence_label(0.001) == "N/A"
    assert confidence_label(None) == "N/A"
    assert confidence_label(float("nan")) == "N/A"
    assert confidence_label("0.9") == "N/A"
    assert confidence_label(True) == "N/A"


def test_sentiment_badge():
    assert sentiment_badge("Positive", 0.5) == "Positive (50%)"
    assert sentiment_badge("", None) == "Unknown (N/A)"


def test_format_published():
    assert format_published("2026-01-05T14:30:00Z") == "Jan 05, 02:30 PM"
    assert format_published("2026-03-09T08:05:00") == "Mar 09, 08:05 AM"
    assert format_published("yesterday") == DATE_UNAVAILABLE
    assert format_published(12345) == DATE_UNAVAILABLE


def test_format_published_missing_uses_now():
    now = datetime(2026, 10, 19, 9, 15)

    assert format_published(None, now=now) == "Oct 19, 09:15 AM"
    assert format_published("", now=now) == "Oct 19, 09:15 AM"
