"""Bundled Forge documentation."""

from .sections import (
    DOCS_BASE_URL,
    DocSection,
    FORGE_DOCS,
    find_relevant_docs,
    build_docs_context,
    keyword_doc,
)

__all__ = [
    "DOCS_BASE_URL",
    "DocSection",
    "FORGE_DOCS",
    "find_relevant_docs",
    "build_docs_context",
    "keyword_doc",
]
