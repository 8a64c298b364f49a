"""Go to definition for the name at a position."""

from typing import Optional

from ..parser import word_at
from ._workspace import open_workspace, range_dict, resolve_name


def find_definition(
    workspace: str,
    file_path: str,
    line: int,
    character: int,
    storage_path: Optional[str] = None
) -> dict:
    """Locate the declaration of the identifier at a zero-based position.

    Args:
        workspace: Workspace identifier from index_folder
        file_path: Path to file within the workspace
        line: Zero-based line
        character: Zero-based column
        storage_path: Custom storage path

    Returns:
        Dict with the declaring file and identifier range, or locations=[]
    """
    store, index, error = open_workspace(workspace, storage_path)
    if error:
        return error

    content = store.get_file_content(workspace, file_path)
    if content is None:
        return {"error": f"File not indexed: {file_path}"}

    word = word_at(content.split("\n"), line, character)
    if not word:
        return {"name": None, "locations": []}

    target_file, symbol = resolve_name(index, file_path, word, line)
    if symbol is None:
        return {"name": word, "locations": []}

    return {
        "name": word,
        "locations": [{
            "file": target_file,
            "kind": symbol.kind.value,
            "detail": symbol.detail,
            "range": range_dict(symbol),
        }],
    }
