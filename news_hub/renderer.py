"""Console rendering of the news listing and the selected article."""

from __future__ import annotations

from bs4 import BeautifulSoup
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.store import RecordStore
from .core.types import SENTIMENTS, ArticleSelection, text_field
from .formatting import format_published, sentiment_badge

_SENTIMENT_STYLES = {"Positive": "green", "Neutral": "white", "Negative": "red"}


def html_to_paragraphs(html: str) -> list[str]:
    """Convert article HTML to plain-text paragraphs."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    return [line.strip() for line in text.splitlines() if line.strip()]


def render_listing(store: RecordStore, console: Console) -> None:
    criteria = store.criteria
    counts = store.counts
    console.print(
        "  ".join(
            f"[{_SENTIMENT_STYLES[s]}]{'▶ ' if s == criteria.sentiment else ''}{s}: {counts[s]}[/]"
            for s in SENTIMENTS
        )
    )

    if store.error:
        console.print(Panel(escape(store.error), title="Error", border_style="red", subtitle="Run again to retry"))

    visible = store.visible
    heading = f"{criteria.sentiment} News"
    if criteria.search:
        heading += f' matching "{escape(criteria.search)}"'
    console.print(f"[bold]{heading}[/bold] ({len(visible)})")

    if not visible:
        message = f"No {criteria.sentiment.lower()} news found"
        if criteria.search:
            message += f' for "{escape(criteria.search)}"'
            hint = "Try adjusting your search terms or selecting a different sentiment filter."
        else:
            hint = "Try selecting a different sentiment filter to see more articles."
        console.print(f"{message}\n[dim]{hint}[/dim]")
        return

    table = Table(show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Sentiment")
    table.add_column("Published", no_wrap=True)
    for record in visible:
        key = record.get("id") or record.get("url") or ""
        table.add_row(
            escape(str(key)),
            escape(text_field(record, "title")),
            escape(text_field(record, "category")),
            escape(sentiment_badge(text_field(record, "sentiment"), record.get("confidence"))),
            format_published(record.get("publishedAt") or record.get("date")),
        )
    console.print(table)


def render_selection(selection: ArticleSelection, console: Console, loading: bool = False) -> None:
    record = selection.record
    meta = [
        escape(sentiment_badge(record.sentiment, record.confidence)),
        escape(record.author),
        escape(record.read_time),
        format_published(record.published_at),
    ]
    if record.tags:
        meta.append(", ".join(f"#{escape(tag)}" for tag in record.tags))
    body = "\n\n".join(escape(p) for p in html_to_paragraphs(selection.content))
    if loading:
        body += "\n\n[dim]Loading full article...[/dim]"
    subtitle = escape(record.url) if record.url else None
    console.print(
        Panel(
            f"[dim]{' · '.join(meta)}[/dim]\n\n{body}",
            title=escape(record.title) or "Untitled",
            subtitle=subtitle,
        )
    )
