"""Tests for the bundled documentation lookup."""

from forgemunch_mcp.docs import (
    DOCS_BASE_URL,
    FORGE_DOCS,
    build_docs_context,
    find_relevant_docs,
    keyword_doc,
)


def test_sections_link_to_docs_site():
    assert FORGE_DOCS
    assert all(s.url.startswith(DOCS_BASE_URL) for s in FORGE_DOCS)
    assert len({s.title for s in FORGE_DOCS}) == len(FORGE_DOCS)


def test_find_relevant_docs_by_keyword():
    sections = find_relevant_docs("what does pfunc mean for a field multiplicity")

    assert sections
    assert sections[0].title == "Field Multiplicity"


def test_find_relevant_docs_temporal():
    titles = [s.title for s in find_relevant_docs("always and eventually in temporal mode")]
    assert titles[0] == "Temporal Forge (Electrum)"


def test_find_relevant_docs_respects_limit():
    assert len(find_relevant_docs("sig pred fun test run", max_sections=2)) <= 2


def test_find_relevant_docs_no_match():
    assert find_relevant_docs("zzzzqqq") == []


def test_build_docs_context_falls_back():
    """Unmatched queries get the introductory sections."""
    context = build_docs_context("zzzzqqq")

    for section in FORGE_DOCS[:4]:
        assert f"## {section.title}" in context


def test_build_docs_context_includes_sources():
    context = build_docs_context("how do I write a test expect block")
    assert "Source: " in context
    assert "## Testing" in context


def test_keyword_doc():
    assert keyword_doc("pfunc").title == "Field Multiplicity"
    assert keyword_doc("extends").title == "Inheritance"
    assert keyword_doc("Eventually").title == "Temporal Forge (Electrum)"
    assert keyword_doc("Person") is None
