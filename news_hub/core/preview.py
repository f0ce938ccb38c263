"""
Preview synthesis for scraped article text.

Listing records carry a scraped body (or only a short description) that is
often noisy: it may end with an upstream truncation marker such as
"[+2239 chars]", have no paragraph structure at all, or be far longer than a
preview should be. This module turns such text into a short, paragraph-aware
HTML preview:

1. Short or missing text yields a fixed placeholder paragraph
2. The trailing truncation marker is stripped
3. The text is split into paragraphs (blank lines first, then single newlines)
4. Up to max_paragraphs paragraphs are taken within a max_chars budget
5. Unbroken text is cut at the last sentence end inside the budget
6. Paragraphs are HTML-escaped and a disposition note is appended
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
import re

from ..config import PreviewConfig

PLACEHOLDER_TEXT = (
    "Article content preview is short or unavailable. "
    "Please open the original article to read the full story."
)
FULL_CONTENT_EXTERNAL = "Full content is available on the original site."
SOURCE_SUMMARY = "Source summary displayed."

_NOISE_MARKER_RE = re.compile(r"\s*\[\+\d+ chars\]\s*$")
_BLANK_LINE_RE = re.compile(r"\r?\n\s*\r?\n")
_NEWLINE_RE = re.compile(r"\r?\n")
_SENTENCE_ENDS = ".!?"


@dataclass(frozen=True)
class PreviewContent:
    """An immutable article preview.

    Attributes:
        paragraphs: HTML-escaped paragraph texts, in reading order
        note: Disposition note (FULL_CONTENT_EXTERNAL or SOURCE_SUMMARY),
              or None for the placeholder
        placeholder: True when no usable text was available
    """

    paragraphs: tuple[str, ...]
    note: str | None = None
    placeholder: bool = False

    def to_html(self) -> str:
        html = "".join(f"<p>{paragraph}</p>" for paragraph in self.paragraphs)
        if self.note:
            html += f'<p class="note">{escape(self.note)}</p>'
        return html


PLACEHOLDER = PreviewContent(paragraphs=(escape(PLACEHOLDER_TEXT),), placeholder=True)


def synthesize_preview(
    raw_text: object,
    fallback_text: object = None,
    cfg: PreviewConfig | None = None,
) -> PreviewContent:
    """Build a bounded preview from the first non-empty of two texts.

    Args:
        raw_text: The scraped article body, usually the record's text field
        fallback_text: Text used when raw_text is empty, usually the description
        cfg: Preview limits; defaults are used when omitted

    Returns:
        The synthesized PreviewContent, or PLACEHOLDER when the text is too
        short to preview
    """
    cfg = cfg or PreviewConfig()
    source = _first_text(raw_text, fallback_text)
    if source is None or len(source.strip()) < cfg.min_chars:
        return PLACEHOLDER

    marker = _NOISE_MARKER_RE.search(source)
    clean = _NOISE_MARKER_RE.sub("", source).strip()
    if len(clean) < cfg.min_chars:
        return PLACEHOLDER

    paragraphs = _select_paragraphs(_split_paragraphs(clean, cfg.min_chars), cfg)
    if not paragraphs:
        paragraphs = [_single_chunk(clean, cfg)]

    preview_length = len(" ".join(paragraphs))
    if marker is not None or len(source) > preview_length + cfg.truncation_slack:
        note = FULL_CONTENT_EXTERNAL
    else:
        note = SOURCE_SUMMARY

    return PreviewContent(paragraphs=tuple(escape(p) for p in paragraphs), note=note)


def _first_text(*candidates: object) -> str | None:
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def _split_paragraphs(text: str, min_chars: int) -> list[str]:
    """Split text into paragraph candidates.

    Returns an empty list when the text has no paragraph breaks at all, so
    that the caller falls back to sentence-based truncation.
    """
    parts = _BLANK_LINE_RE.split(text)
    if len(parts) < 2:
        parts = _NEWLINE_RE.split(text)
    if len(parts) < 2:
        return []
    stripped = (part.strip() for part in parts)
    return [part for part in stripped if len(part) >= min_chars]


def _select_paragraphs(candidates: list[str], cfg: PreviewConfig) -> list[str]:
    selected: list[str] = []
    total = 0
    for paragraph in candidates:
        if len(selected) >= cfg.max_paragraphs:
            break
        # The first paragraph is always taken, even when it alone exceeds the budget
        if selected and total + len(paragraph) > cfg.max_chars:
            break
        selected.append(paragraph)
        total += len(paragraph)
    return selected


def _single_chunk(text: str, cfg: PreviewConfig) -> str:
    if len(text) <= cfg.fallback_threshold:
        return text
    chunk = text[: cfg.max_chars].strip()
    last_end = max(chunk.rfind(char) for char in _SENTENCE_ENDS)
    if last_end > cfg.sentence_floor:
        chunk = chunk[: last_end + 1].strip()
    return chunk
