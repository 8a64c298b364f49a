"""Search the bundled Forge documentation."""

from ..docs import find_relevant_docs


def lookup_docs(query: str, max_sections: int = 3) -> dict:
    """Return the documentation sections most relevant to a query."""
    sections = find_relevant_docs(query, max_sections=max_sections)

    return {
        "query": query,
        "result_count": len(sections),
        "sections": [
            {"title": s.title, "url": s.url, "content": s.content}
            for s in sections
        ],
    }
