"""
News API access.

This package handles the listing and detail requests against the news
backend.
"""

from .client import NewsApiClient

__all__ = ["NewsApiClient"]
