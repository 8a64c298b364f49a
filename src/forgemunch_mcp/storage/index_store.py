"""Workspace index storage with save/load and raw file retrieval."""

import fnmatch
import json
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog

from ..parser.symbols import Range, Symbol, SymbolKind, make_symbol_id

logger = structlog.get_logger(__name__)


@dataclass
class ForgeIndex:
    """Index for a folder of Forge models."""
    workspace: str               # Folder name used as the index key
    folder_path: str             # Absolute folder that was indexed
    indexed_at: str              # ISO timestamp
    source_files: list[str]      # All indexed file paths (relative)
    failed_files: list[str]      # Files that did not parse
    symbols: list[dict]          # Serialized Symbol dicts

    def file_symbols(self, file_path: str) -> list[dict]:
        """Symbols of one file, in document order."""
        return [s for s in self.symbols if s.get("file") == file_path]

    def search(self, query: str, kind: Optional[str] = None, file_pattern: Optional[str] = None) -> list[tuple[int, dict]]:
        """Search symbols with weighted scoring, best first."""
        query_lower = query.lower()
        query_words = set(query_lower.split())

        scored = []
        for sym in self.symbols:
            if kind and sym.get("kind") != kind:
                continue
            if file_pattern and not self._match_pattern(sym.get("file", ""), file_pattern):
                continue

            score = score_symbol(sym, query_lower, query_words)
            if score > 0:
                scored.append((score, sym))

        scored.sort(key=lambda x: x[0], reverse=True)
        return scored

    def _match_pattern(self, file_path: str, pattern: str) -> bool:
        """Match file path against glob pattern."""
        return fnmatch.fnmatch(file_path, pattern) or fnmatch.fnmatch(file_path, f"*/{pattern}")


def score_symbol(sym: dict, query_lower: str, query_words: set) -> int:
    """Calculate search score for a symbol."""
    score = 0

    # 1. Exact name match (highest weight)
    name_lower = sym.get("name", "").lower()
    if query_lower == name_lower:
        score += 20
    elif query_lower in name_lower:
        score += 10

    # 2. Name word overlap
    for word in query_words:
        if word in name_lower:
            score += 5

    # 3. Detail match
    detail_lower = (sym.get("detail") or "").lower()
    if query_lower in detail_lower:
        score += 8
    for word in query_words:
        if word in detail_lower:
            score += 2

    # 4. Summary match
    summary_lower = sym.get("summary", "").lower()
    if query_lower in summary_lower:
        score += 5
    for word in query_words:
        if word in summary_lower:
            score += 1

    # 5. Documentation match
    doc_lower = (sym.get("documentation") or "").lower()
    for word in query_words:
        if word in doc_lower:
            score += 1

    return score


def symbol_to_dict(symbol: Symbol, file_path: str, summary: str = "") -> dict:
    """Convert Symbol to a JSON-ready dict tagged with its file."""
    return {
        "id": make_symbol_id(file_path, symbol),
        "file": file_path,
        "name": symbol.name,
        "kind": symbol.kind.value,
        "line": symbol.range.start.line,
        "character": symbol.range.start.character,
        "end_line": symbol.range.end.line,
        "end_character": symbol.range.end.character,
        "detail": symbol.detail,
        "documentation": symbol.documentation,
        "container": symbol.container,
        "summary": summary,
    }


def dict_to_symbol(d: dict) -> Symbol:
    """Convert a stored dict back to a Symbol."""
    return Symbol(
        name=d["name"],
        kind=SymbolKind(d["kind"]),
        range=Range.create(d["line"], d["character"], d["end_line"], d["end_character"]),
        detail=d.get("detail"),
        documentation=d.get("documentation"),
        container=d.get("container"),
    )


class IndexStore:
    """Storage for workspace indexes plus copies of the indexed files."""

    def __init__(self, base_path: Optional[str] = None):
        """Initialize store.

        Args:
            base_path: Base directory for storage. Defaults to
                $FORGE_INDEX_PATH, then ~/.forge-index/
        """
        base_path = base_path or os.environ.get("FORGE_INDEX_PATH")
        if base_path:
            self.base_path = Path(base_path)
        else:
            self.base_path = Path.home() / ".forge-index"

        self.base_path.mkdir(parents=True, exist_ok=True)

    def _index_path(self, workspace: str) -> Path:
        """Path to index JSON file."""
        return self.base_path / f"{workspace}.json"

    def _content_dir(self, workspace: str) -> Path:
        """Path to raw content directory."""
        return self.base_path / workspace

    def save_index(
        self,
        workspace: str,
        folder_path: str,
        symbols: list[dict],
        raw_files: dict[str, str],
        failed_files: Optional[list[str]] = None,
    ) -> ForgeIndex:
        """Save index and raw files to storage.

        Args:
            workspace: Index key
            folder_path: Folder the files were read from
            symbols: Serialized symbols (see symbol_to_dict)
            raw_files: Dict mapping relative file path to content
            failed_files: Files that did not parse

        Returns:
            ForgeIndex object
        """
        index = ForgeIndex(
            workspace=workspace,
            folder_path=folder_path,
            indexed_at=datetime.now().isoformat(),
            source_files=sorted(raw_files),
            failed_files=failed_files or [],
            symbols=symbols,
        )

        with open(self._index_path(workspace), "w", encoding="utf-8") as f:
            json.dump(self._index_to_dict(index), f, indent=2)

        content_dir = self._content_dir(workspace)
        if content_dir.exists():
            shutil.rmtree(content_dir)
        content_dir.mkdir(parents=True, exist_ok=True)

        for file_path, content in raw_files.items():
            file_dest = content_dir / file_path
            file_dest.parent.mkdir(parents=True, exist_ok=True)
            with open(file_dest, "w", encoding="utf-8") as f:
                f.write(content)

        logger.info("index_saved", workspace=workspace, files=len(raw_files), symbols=len(symbols))
        return index

    def load_index(self, workspace: str) -> Optional[ForgeIndex]:
        """Load index from storage."""
        index_path = self._index_path(workspace)

        if not index_path.exists():
            return None

        with open(index_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return ForgeIndex(
            workspace=data["workspace"],
            folder_path=data["folder_path"],
            indexed_at=data["indexed_at"],
            source_files=data["source_files"],
            failed_files=data.get("failed_files", []),
            symbols=data["symbols"],
        )

    def get_file_content(self, workspace: str, file_path: str) -> Optional[str]:
        """Read the stored copy of an indexed file."""
        content_dir = self._content_dir(workspace).resolve()
        target = (content_dir / file_path).resolve()

        # Refuse paths that escape the workspace copy
        if content_dir not in target.parents or not target.is_file():
            return None

        return target.read_text(encoding="utf-8")

    def list_indexes(self) -> list[dict]:
        """List all indexed workspaces."""
        indexes = []

        for index_file in sorted(self.base_path.glob("*.json")):
            try:
                with open(index_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                indexes.append({
                    "workspace": data["workspace"],
                    "folder_path": data["folder_path"],
                    "indexed_at": data["indexed_at"],
                    "symbol_count": len(data["symbols"]),
                    "file_count": len(data["source_files"]),
                })
            except (OSError, ValueError, KeyError) as e:
                logger.warning("index_unreadable", path=str(index_file), error=str(e))
                continue

        return indexes

    def delete_index(self, workspace: str) -> bool:
        """Delete an index and its raw files."""
        index_path = self._index_path(workspace)
        content_dir = self._content_dir(workspace)

        deleted = False

        if index_path.exists():
            index_path.unlink()
            deleted = True

        if content_dir.exists():
            shutil.rmtree(content_dir)
            deleted = True

        return deleted

    def _index_to_dict(self, index: ForgeIndex) -> dict:
        """Convert ForgeIndex to dict."""
        return {
            "workspace": index.workspace,
            "folder_path": index.folder_path,
            "indexed_at": index.indexed_at,
            "source_files": index.source_files,
            "failed_files": index.failed_files,
            "symbols": index.symbols,
        }
