"""List indexed workspaces."""

from typing import Optional

from ..storage import IndexStore


def list_indexes(storage_path: Optional[str] = None) -> dict:
    """List all indexed workspaces.

    Returns:
        Dict with count and list of workspaces
    """
    store = IndexStore(base_path=storage_path)
    indexes = store.list_indexes()

    return {
        "count": len(indexes),
        "workspaces": indexes
    }
