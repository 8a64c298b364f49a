"""Parser package for extracting symbols from Forge models."""

from .symbols import Symbol, SymbolKind, Position, Range, slugify, make_symbol_id
from .comments import extract_doc_comment, clean_doc_comment
from .grammar import FORGE_GRAMMAR, get_parser, parse_source
from .extractor import extract_symbols, parse_symbols
from .hierarchy import SymbolNode, build_symbol_tree, flatten_tree
from .navigation import (
    OUTLINE_KINDS,
    outline_symbols,
    symbol_at,
    word_at,
    find_definition,
    render_hover,
)

FORGE_EXTENSIONS = {".frg"}

__all__ = [
    "Symbol",
    "SymbolKind",
    "Position",
    "Range",
    "slugify",
    "make_symbol_id",
    "extract_doc_comment",
    "clean_doc_comment",
    "FORGE_GRAMMAR",
    "get_parser",
    "parse_source",
    "extract_symbols",
    "parse_symbols",
    "SymbolNode",
    "build_symbol_tree",
    "flatten_tree",
    "OUTLINE_KINDS",
    "outline_symbols",
    "symbol_at",
    "word_at",
    "find_definition",
    "render_hover",
    "FORGE_EXTENSIONS",
]
