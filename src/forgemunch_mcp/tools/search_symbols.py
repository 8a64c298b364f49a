"""Search symbols across a workspace."""

from typing import Optional

from ._workspace import open_workspace


def search_symbols(
    workspace: str,
    query: str,
    kind: Optional[str] = None,
    file_pattern: Optional[str] = None,
    max_results: int = 10,
    storage_path: Optional[str] = None
) -> dict:
    """Search for symbols matching a query.

    Args:
        workspace: Workspace identifier from index_folder
        query: Search query
        kind: Optional filter by symbol kind
        file_pattern: Optional glob pattern to filter files
        max_results: Maximum results to return
        storage_path: Custom storage path

    Returns:
        Dict with search results
    """
    _, index, error = open_workspace(workspace, storage_path)
    if error:
        return error

    results = []
    for score, sym in index.search(query, kind=kind, file_pattern=file_pattern)[:max_results]:
        results.append({
            "id": sym["id"],
            "kind": sym["kind"],
            "name": sym["name"],
            "file": sym["file"],
            "line": sym["line"],
            "detail": sym.get("detail"),
            "summary": sym.get("summary", ""),
            "score": score
        })

    return {
        "workspace": workspace,
        "query": query,
        "result_count": len(results),
        "results": results
    }
