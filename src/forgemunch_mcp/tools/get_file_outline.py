"""Get file outline - declarations in a specific file."""

from typing import Optional

from ..parser import OUTLINE_KINDS, SymbolKind, build_symbol_tree, outline_symbols
from ..storage import dict_to_symbol
from ._workspace import open_workspace


def get_file_outline(
    workspace: str,
    file_path: str,
    storage_path: Optional[str] = None
) -> dict:
    """Get sigs with fields and preds/funs with parameters, as a tree.

    Args:
        workspace: Workspace identifier from index_folder
        file_path: Path to file within the workspace
        storage_path: Custom storage path

    Returns:
        Dict with symbols outline
    """
    _, index, error = open_workspace(workspace, storage_path)
    if error:
        return error

    file_symbols = index.file_symbols(file_path)

    if not file_symbols:
        result = {"workspace": workspace, "file": file_path, "symbols": []}
        if file_path in index.failed_files:
            result["error"] = f"File did not parse: {file_path}"
        elif file_path not in index.source_files:
            result["error"] = f"File not indexed: {file_path}"
        return result

    kinds = OUTLINE_KINDS | {SymbolKind.PARAMETER}
    wanted = {kind.value for kind in kinds}
    records = {
        (s["name"], s["line"], s["character"]): s
        for s in file_symbols if s["kind"] in wanted
    }
    symbols = outline_symbols([dict_to_symbol(s) for s in file_symbols], kinds)
    tree = build_symbol_tree(symbols)

    return {
        "workspace": workspace,
        "file": file_path,
        "symbols": [_node_to_dict(n, records) for n in tree],
    }


def _node_to_dict(node, records: dict) -> dict:
    """Convert SymbolNode to output dict."""
    symbol = node.symbol
    record = records.get((symbol.name, symbol.range.start.line, symbol.range.start.character), {})

    result = {
        "id": record.get("id"),
        "kind": symbol.kind.value,
        "name": symbol.name,
        "detail": symbol.detail,
        "summary": record.get("summary", ""),
        "line": symbol.range.start.line,
        "character": symbol.range.start.character,
    }

    if node.children:
        result["children"] = [_node_to_dict(c, records) for c in node.children]

    return result
