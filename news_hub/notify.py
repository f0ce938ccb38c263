"""
User notification sinks.

Notifications are fire-and-forget: callers never inspect a return value.
"""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console


class Notifier(Protocol):
    def notify_success(self, message: str) -> None: ...

    def notify_error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Prints notifications to a rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def notify_success(self, message: str) -> None:
        self.console.print(f"[green]✔[/green] {message}")

    def notify_error(self, message: str) -> None:
        self.console.print(f"[bold red]✖[/bold red] {message}")


class LogNotifier:
    """Sends notifications to a logger, for non-interactive use."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("news_hub.notify")

    def notify_success(self, message: str) -> None:
        self.logger.info(message, extra={"event": "notify_success"})

    def notify_error(self, message: str) -> None:
        self.logger.error(message, extra={"event": "notify_error"})
