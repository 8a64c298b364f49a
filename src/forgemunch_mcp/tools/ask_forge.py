"""Ask the Forge Assistant a question."""

from typing import Optional

from ..assistant import ChatTurn, ForgeAssistant
from ._workspace import open_workspace


def ask_forge(
    question: str,
    command: str = "",
    history: Optional[list[dict]] = None,
    workspace: Optional[str] = None,
    file_path: Optional[str] = None,
    storage_path: Optional[str] = None
) -> dict:
    """Answer a Forge question, optionally with an indexed file as context.

    Args:
        question: The user's prompt
        command: "" (general), "docs" or "explain"
        history: Earlier turns as {"role", "content"} dicts
        workspace: Workspace holding the user's current file
        file_path: The user's current file within the workspace
        storage_path: Custom storage path

    Returns:
        Dict with the answer, sources and followups
    """
    file_content = None
    if workspace and file_path:
        store, _, error = open_workspace(workspace, storage_path)
        if error:
            return error
        file_content = store.get_file_content(workspace, file_path)
        if file_content is None:
            return {"error": f"File not indexed: {file_path}"}

    turns = [
        ChatTurn(role=t.get("role", ""), content=t.get("content", ""))
        for t in history or []
    ]

    assistant = ForgeAssistant()
    return assistant.ask(
        question,
        command=command,
        history=turns,
        file_name=file_path.rsplit("/", 1)[-1] if file_path else None,
        file_content=file_content,
    )
