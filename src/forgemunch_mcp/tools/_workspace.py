"""Shared index lookup for the query tools."""

from typing import Optional

from ..parser import find_definition
from ..parser.navigation import LOCAL_KINDS
from ..storage import ForgeIndex, IndexStore, dict_to_symbol

LOCAL_KIND_VALUES = {kind.value for kind in LOCAL_KINDS}


def open_workspace(
    workspace: str,
    storage_path: Optional[str] = None
) -> tuple[IndexStore, Optional[ForgeIndex], Optional[dict]]:
    """Load a workspace index.

    Returns:
        (store, index, error) where error is a tool error dict when the
        workspace is not indexed
    """
    store = IndexStore(base_path=storage_path)
    index = store.load_index(workspace)

    if not index:
        return store, None, {"error": f"Workspace not indexed: {workspace}"}

    return store, index, None


def range_dict(symbol) -> dict:
    """Zero-based LSP-style range of a symbol's identifier."""
    return {
        "start": {"line": symbol.range.start.line, "character": symbol.range.start.character},
        "end": {"line": symbol.range.end.line, "character": symbol.range.end.character},
    }


def resolve_name(index: ForgeIndex, file_path: str, name: str, line: Optional[int] = None):
    """Resolve a referenced name, preferring the current file.

    Locals (parameters, bound variables) only resolve within the current
    file; other files contribute document-level declarations.

    Returns:
        (file, Symbol) or (None, None)
    """
    current = [dict_to_symbol(s) for s in index.file_symbols(file_path)]
    symbol = find_definition(current, name, line)
    if symbol is not None:
        return file_path, symbol

    for other in index.source_files:
        if other == file_path:
            continue
        candidates = [
            dict_to_symbol(s) for s in index.file_symbols(other)
            if s["kind"] not in LOCAL_KIND_VALUES
        ]
        symbol = find_definition(candidates, name)
        if symbol is not None:
            return other, symbol

    return None, None
