"""Tests for summarizer module."""

from forgemunch_mcp.parser import Range, Symbol, SymbolKind
from forgemunch_mcp.summarizer import (
    detail_fallback,
    extract_summary_from_documentation,
    summarize_symbols,
)


def _symbol(name="Person", kind=SymbolKind.TYPE, detail=None, documentation=None):
    return Symbol(
        name=name,
        kind=kind,
        range=Range.create(0, 0, 0, len(name)),
        detail=detail,
        documentation=documentation,
    )


def test_extract_summary_from_documentation():
    """Test first sentence extraction from a doc comment."""
    assert extract_summary_from_documentation("A person. Has friends.") == "A person."
    assert extract_summary_from_documentation("First line\nSecond line") == "First line"
    assert extract_summary_from_documentation("") == ""


def test_detail_fallback():
    assert detail_fallback(_symbol(detail="sig Person")) == "sig Person"
    assert detail_fallback(_symbol(kind=SymbolKind.TEST)) == "test Person"
    assert len(detail_fallback(_symbol(detail="x" * 300))) == 120


def test_summarize_symbols():
    """Doc comments win over details; output aligns with input."""
    symbols = [
        _symbol(detail="sig Person", documentation="A person in the model. More."),
        _symbol(name="age", kind=SymbolKind.FIELD, detail="field in Person: one Int"),
    ]

    assert summarize_symbols(symbols) == [
        "A person in the model.",
        "field in Person: one Int",
    ]
