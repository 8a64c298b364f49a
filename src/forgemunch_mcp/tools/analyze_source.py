"""Extract symbols from Forge source passed inline, without indexing."""

from ..parser import OUTLINE_KINDS, outline_symbols, parse_symbols
from ._workspace import range_dict


def analyze_source(source: str, outline_only: bool = False) -> dict:
    """Extract declarations from raw Forge text.

    Args:
        source: Forge model text
        outline_only: Keep only sigs, fields, preds and funs

    Returns:
        Dict with the symbols in document order (empty if the text does not parse)
    """
    symbols = parse_symbols(source)
    if outline_only:
        symbols = outline_symbols(symbols, OUTLINE_KINDS)

    return {
        "symbol_count": len(symbols),
        "symbols": [
            {
                "name": s.name,
                "kind": s.kind.value,
                "range": range_dict(s),
                "detail": s.detail,
                "documentation": s.documentation,
                "container": s.container,
            }
            for s in symbols
        ],
    }
