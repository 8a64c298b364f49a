"""Build symbol tree hierarchy for file outlines."""

from dataclasses import dataclass, field

from .symbols import Symbol, SymbolKind


@dataclass
class SymbolNode:
    """A node in the symbol tree with children."""
    symbol: Symbol
    children: list["SymbolNode"] = field(default_factory=list)


_PARENT_KINDS = {
    SymbolKind.FIELD: (SymbolKind.TYPE,),
    SymbolKind.PARAMETER: (SymbolKind.PREDICATE, SymbolKind.FUNCTION),
}


def build_symbol_tree(symbols: list[Symbol]) -> list[SymbolNode]:
    """Build a hierarchical tree from flat symbol list.

    Fields become children of their sig, parameters children of their
    pred or fun. Returns top-level symbols in document order.
    """
    roots = []
    owners: dict[tuple[SymbolKind, str], SymbolNode] = {}

    for symbol in symbols:
        node = SymbolNode(symbol=symbol)

        parent = None
        if symbol.container:
            for kind in _PARENT_KINDS.get(symbol.kind, ()):
                parent = owners.get((kind, symbol.container))
                if parent:
                    break

        if parent:
            parent.children.append(node)
        else:
            roots.append(node)

        if symbol.kind in (SymbolKind.TYPE, SymbolKind.PREDICATE, SymbolKind.FUNCTION):
            owners[(symbol.kind, symbol.name)] = node

    return roots


def flatten_tree(nodes: list[SymbolNode], depth: int = 0) -> list[tuple[Symbol, int]]:
    """Flatten symbol tree with depth information.

    Returns list of (symbol, depth) tuples for indentation.
    """
    result = []
    for node in nodes:
        result.append((node.symbol, depth))
        result.extend(flatten_tree(node.children, depth + 1))
    return result
