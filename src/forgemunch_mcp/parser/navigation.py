"""Position and name queries over an extracted symbol list."""

import re
from typing import Iterable, Optional

from .symbols import Symbol, SymbolKind

OUTLINE_KINDS = frozenset({
    SymbolKind.TYPE,
    SymbolKind.PREDICATE,
    SymbolKind.FUNCTION,
    SymbolKind.FIELD,
})

# Declarations visible from anywhere in the document
GLOBAL_KINDS = (
    SymbolKind.TYPE,
    SymbolKind.PREDICATE,
    SymbolKind.FUNCTION,
    SymbolKind.FIELD,
    SymbolKind.TEST,
    SymbolKind.EXAMPLE,
)

LOCAL_KINDS = (SymbolKind.PARAMETER, SymbolKind.VARIABLE)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def outline_symbols(symbols: list[Symbol], kinds: Iterable[SymbolKind] = OUTLINE_KINDS) -> list[Symbol]:
    """Keep only the kinds shown in a document outline, in document order."""
    wanted = set(kinds)
    return [s for s in symbols if s.kind in wanted]


def symbol_at(symbols: list[Symbol], line: int, character: int) -> Optional[Symbol]:
    """Find the symbol whose identifier range contains a zero-based position."""
    for symbol in symbols:
        if symbol.range.contains(line, character):
            return symbol
    return None


def word_at(lines: list[str], line: int, character: int) -> Optional[str]:
    """Return the identifier under the cursor, if any.

    A cursor sitting just past the last character still counts.
    """
    if line < 0 or line >= len(lines):
        return None

    for match in _IDENTIFIER.finditer(lines[line]):
        if match.start() <= character <= match.end():
            return match.group(0)
    return None


def find_definition(symbols: list[Symbol], name: str, line: Optional[int] = None) -> Optional[Symbol]:
    """Resolve a referenced name to its declaration.

    Document-level declarations win. Otherwise the closest parameter or
    bound variable declared at or above ``line`` is returned.
    """
    for kind in GLOBAL_KINDS:
        for symbol in symbols:
            if symbol.kind == kind and symbol.name == name:
                return symbol

    best = None
    for symbol in symbols:
        if symbol.kind not in LOCAL_KINDS or symbol.name != name:
            continue
        if line is not None and symbol.range.start.line > line:
            break
        best = symbol
    return best


def render_hover(symbol: Symbol) -> str:
    """Render hover markdown: kind and name, signature, then documentation."""
    parts = [f"**{symbol.kind.value}** `{symbol.name}`"]

    if symbol.detail:
        parts.append(f"```forge\n{symbol.detail}\n```")

    if symbol.documentation:
        parts.append(symbol.documentation)

    return "\n\n".join(parts)
