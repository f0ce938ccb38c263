"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ApiConfig: News API endpoints and HTTP settings
- PreviewConfig: Limits used when synthesizing article previews
- DisclosureConfig: Article selection defaults and close grace period
- FilterConfig: Initial filter criteria
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ApiConfig:
    """Configuration for the news API client.

    Attributes:
        base_url: Base URL of the news backend
        base_url_env: Environment variable that overrides base_url when set
        list_path: Path of the listing endpoint
        detail_path: Path template of the detail endpoint, with an {id} placeholder
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for transport errors and 5xx responses
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    base_url: str = "http://localhost:8080"
    base_url_env: str = "NEWS_HUB_API_URL"
    list_path: str = "/api/news"
    detail_path: str = "/api/news/{id}"
    timeout_seconds: float = 20.0
    retries: int = 2
    trust_env: bool = True
    user_agent: str = "news-hub/0.1"


@dataclass
class PreviewConfig:
    """Limits for preview synthesis.

    Attributes:
        min_chars: Texts (and paragraphs) shorter than this are not usable
        max_paragraphs: Maximum number of paragraphs in a preview
        max_chars: Running character budget across preview paragraphs
        fallback_threshold: Unbroken texts longer than this are cut to max_chars
        sentence_floor: A sentence end must lie past this index to be used as a cut point
        truncation_slack: Extra characters tolerated before a preview counts as truncated
    """

    min_chars: int = 50
    max_paragraphs: int = 3
    max_chars: int = 800
    fallback_threshold: int = 300
    sentence_floor: int = 100
    truncation_slack: int = 200


@dataclass
class DisclosureConfig:
    """Configuration for article selection.

    Attributes:
        close_grace_seconds: Delay between closing a selection and clearing it
        default_author: Author shown when neither author nor source is known
        default_read_time: Read-time estimate shown when none is supplied
    """

    close_grace_seconds: float = 0.3
    default_author: str = "Unknown Author"
    default_read_time: str = "5 min read"


@dataclass
class FilterConfig:
    """Configuration for the initial filter criteria.

    Attributes:
        default_sentiment: Sentiment selected before the user picks one
    """

    default_sentiment: str = "Neutral"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "news_hub.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    api: ApiConfig = field(default_factory=ApiConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    disclosure: DisclosureConfig = field(default_factory=DisclosureConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "api": {
            "base_url": cfg.api.base_url,
            "base_url_env": cfg.api.base_url_env,
            "list_path": cfg.api.list_path,
            "detail_path": cfg.api.detail_path,
            "timeout_seconds": cfg.api.timeout_seconds,
            "retries": cfg.api.retries,
            "trust_env": cfg.api.trust_env,
            "user_agent": cfg.api.user_agent,
        },
        "preview": {
            "min_chars": cfg.preview.min_chars,
            "max_paragraphs": cfg.preview.max_paragraphs,
            "max_chars": cfg.preview.max_chars,
            "fallback_threshold": cfg.preview.fallback_threshold,
            "sentence_floor": cfg.preview.sentence_floor,
            "truncation_slack": cfg.preview.truncation_slack,
        },
        "disclosure": {
            "close_grace_seconds": cfg.disclosure.close_grace_seconds,
            "default_author": cfg.disclosure.default_author,
            "default_read_time": cfg.disclosure.default_read_time,
        },
        "filter": {
            "default_sentiment": cfg.filter.default_sentiment,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        api=ApiConfig(**data["api"]),
        preview=PreviewConfig(**data["preview"]),
        disclosure=DisclosureConfig(**data["disclosure"]),
        filter=FilterConfig(**data["filter"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_base_url(cfg: ApiConfig) -> str:
    """Get the API base URL, preferring the environment override when set."""
    if cfg.base_url_env:
        env_url = os.getenv(cfg.base_url_env)
        if env_url:
            return env_url
    return cfg.base_url
