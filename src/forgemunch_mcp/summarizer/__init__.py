"""Summarizer package for generating symbol summaries."""

from .summaries import (
    extract_summary_from_documentation,
    detail_fallback,
    summarize_symbols,
)

__all__ = [
    "extract_summary_from_documentation",
    "detail_fallback",
    "summarize_symbols",
]
