"""Index local folder tool - walk, parse, summarize, save."""

from pathlib import Path
from typing import Optional

import structlog
from lark.exceptions import LarkError

from ..parser import FORGE_EXTENSIONS, parse_source, extract_symbols
from ..storage import IndexStore, symbol_to_dict
from ..summarizer import summarize_symbols

logger = structlog.get_logger(__name__)

# File patterns to skip
SKIP_PATTERNS = [
    "node_modules/", "venv/", ".venv/", "__pycache__/",
    "dist/", "build/", ".git/", ".tox/",
    "compiled/",
]

MAX_FILES = 500


def should_skip_file(path: str) -> bool:
    """Check if file should be skipped based on path patterns."""
    normalized = path.replace("\\", "/")
    for pattern in SKIP_PATTERNS:
        if pattern in normalized:
            return True
    return False


def _first_line(error: Exception) -> str:
    text = str(error).strip()
    return text.splitlines()[0] if text else type(error).__name__


def discover_local_files(
    folder_path: Path,
    max_files: int = MAX_FILES,
    max_size: int = 500 * 1024,  # 500KB
) -> list[Path]:
    """Discover Forge files in a local folder.

    Args:
        folder_path: Root folder to scan
        max_files: Maximum number of files to index
        max_size: Maximum file size in bytes

    Returns:
        Sorted list of Path objects for .frg files
    """
    files = []

    for file_path in sorted(folder_path.rglob("*")):
        if not file_path.is_file():
            continue

        try:
            rel_path = file_path.relative_to(folder_path).as_posix()
        except ValueError:
            continue

        if should_skip_file(rel_path):
            continue

        if file_path.suffix not in FORGE_EXTENSIONS:
            continue

        try:
            if file_path.stat().st_size > max_size:
                continue
        except OSError:
            continue

        files.append(file_path)

    if len(files) > max_files:
        # Shallow files first
        files.sort(key=lambda p: (len(p.relative_to(folder_path).parts), p.as_posix()))
        files = sorted(files[:max_files])

    return files


def index_folder(
    path: str,
    storage_path: Optional[str] = None
) -> dict:
    """Index a local folder containing Forge models.

    Args:
        path: Path to local folder (absolute or relative)
        storage_path: Custom storage path (default: ~/.forge-index/)

    Returns:
        Dict with indexing results
    """
    folder_path = Path(path).expanduser().resolve()

    if not folder_path.exists():
        return {"success": False, "error": f"Folder not found: {path}"}

    if not folder_path.is_dir():
        return {"success": False, "error": f"Path is not a directory: {path}"}

    source_files = discover_local_files(folder_path)

    if not source_files:
        return {"success": False, "error": "No Forge (.frg) files found"}

    warnings = []
    all_symbols = []
    raw_files = {}
    failed_files = []

    for file_path in source_files:
        rel_path = file_path.relative_to(folder_path).as_posix()

        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            warnings.append(f"Failed to read {rel_path}: {e}")
            continue

        raw_files[rel_path] = content

        try:
            tree = parse_source(content)
        except LarkError as e:
            message = _first_line(e)
            logger.warning("parse_failed", file=rel_path, error=message)
            failed_files.append(rel_path)
            warnings.append(f"Failed to parse {rel_path}: {message}")
            continue

        symbols = extract_symbols(tree, content)
        summaries = summarize_symbols(symbols)
        all_symbols.extend(
            symbol_to_dict(sym, rel_path, summary)
            for sym, summary in zip(symbols, summaries)
        )

    if not raw_files:
        return {"success": False, "error": "No readable Forge files", "warnings": warnings}

    workspace = folder_path.name

    store = IndexStore(base_path=storage_path)
    index = store.save_index(
        workspace=workspace,
        folder_path=str(folder_path),
        symbols=all_symbols,
        raw_files=raw_files,
        failed_files=failed_files,
    )

    result = {
        "success": True,
        "workspace": workspace,
        "folder_path": str(folder_path),
        "indexed_at": index.indexed_at,
        "file_count": len(raw_files),
        "symbol_count": len(all_symbols),
        "files": index.source_files[:20],  # Limit files in response
    }

    if failed_files:
        result["failed_files"] = failed_files

    if warnings:
        result["warnings"] = warnings

    if len(source_files) >= MAX_FILES:
        result["note"] = f"Folder has many files; indexed first {MAX_FILES}"

    return result
