"""Symbol dataclass and utility functions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SymbolKind(str, Enum):
    """Kinds of declarations found in a Forge model."""
    TYPE = "sig"
    PREDICATE = "predicate"
    FUNCTION = "function"
    FIELD = "field"
    VARIABLE = "variable"
    PARAMETER = "parameter"
    TEST = "test"
    EXAMPLE = "example"


@dataclass(frozen=True)
class Position:
    line: int       # 0-indexed
    character: int  # 0-indexed


@dataclass(frozen=True)
class Range:
    """Half-open span [start, end) over the identifier text."""
    start: Position
    end: Position

    @classmethod
    def create(cls, line: int, character: int, end_line: int, end_character: int) -> "Range":
        return cls(Position(line, character), Position(end_line, end_character))

    def contains(self, line: int, character: int) -> bool:
        """Check whether a zero-based position falls inside the range."""
        point = (line, character)
        return (self.start.line, self.start.character) <= point < (self.end.line, self.end.character)


@dataclass(frozen=True)
class Symbol:
    """A named declaration extracted from a Forge document."""
    name: str                            # Identifier text (e.g., "Person")
    kind: SymbolKind
    range: Range                         # Span of the identifier token only
    detail: Optional[str] = None         # Rendered signature (e.g., "fun f[p: A]: set A")
    documentation: Optional[str] = None  # Cleaned /** ... */ text
    container: Optional[str] = None      # Enclosing sig for fields, pred/fun for parameters


def slugify(text: str) -> str:
    """Convert file path to slug format.

    Replace / with - and . with - for use in symbol IDs.
    Example: models/social.frg -> models-social-frg
    """
    return text.replace("/", "-").replace(".", "-")


def make_symbol_id(file_path: str, symbol: Symbol) -> str:
    """Generate unique symbol ID.

    Format: {file_slug}::{container.}{name}@{line}
    The line keeps bound variables that reuse a name apart.
    Example: models-social-frg::Person.friends@3
    """
    qualified = f"{symbol.container}.{symbol.name}" if symbol.container else symbol.name
    return f"{slugify(file_path)}::{qualified}@{symbol.range.start.line}"
