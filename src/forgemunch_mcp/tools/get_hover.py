"""Hover information at a position in an indexed file."""

from typing import Optional

from ..docs import keyword_doc
from ..parser import render_hover, symbol_at, word_at
from ..storage import dict_to_symbol
from ._workspace import open_workspace, range_dict, resolve_name


def get_hover(
    workspace: str,
    file_path: str,
    line: int,
    character: int,
    storage_path: Optional[str] = None
) -> dict:
    """Describe the declaration under, or referenced at, a zero-based position.

    Args:
        workspace: Workspace identifier from index_folder
        file_path: Path to file within the workspace
        line: Zero-based line
        character: Zero-based column
        storage_path: Custom storage path

    Returns:
        Dict with hover markdown; contents is None when nothing matches
    """
    store, index, error = open_workspace(workspace, storage_path)
    if error:
        return error

    content = store.get_file_content(workspace, file_path)
    if content is None:
        return {"error": f"File not indexed: {file_path}"}

    symbols = [dict_to_symbol(s) for s in index.file_symbols(file_path)]
    symbol_file = file_path
    symbol = symbol_at(symbols, line, character)

    if symbol is None:
        word = word_at(content.split("\n"), line, character)
        if not word:
            return {"file": file_path, "contents": None}

        symbol_file, symbol = resolve_name(index, file_path, word, line)
        if symbol is None:
            section = keyword_doc(word)
            if section is None:
                return {"file": file_path, "contents": None}
            return {
                "file": file_path,
                "name": word,
                "kind": "keyword",
                "contents": f"**{section.title}**\n\n{section.content}\n\n[Documentation]({section.url})",
            }

    return {
        "file": symbol_file,
        "name": symbol.name,
        "kind": symbol.kind.value,
        "contents": render_hover(symbol),
        "range": range_dict(symbol),
    }
