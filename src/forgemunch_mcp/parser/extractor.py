"""Declaration extractor over the lark tree of a Forge model."""

from typing import Optional

import structlog
from lark import Token, Tree
from lark.exceptions import LarkError

from .comments import extract_doc_comment
from .grammar import parse_source
from .symbols import Range, Symbol, SymbolKind

logger = structlog.get_logger(__name__)


def parse_symbols(content: str) -> list[Symbol]:
    """Parse Forge source and extract its symbols.

    Malformed source never raises: the failure is logged and an empty
    list is returned.

    Args:
        content: Raw Forge source

    Returns:
        List of Symbol objects in document order
    """
    try:
        tree = parse_source(content)
    except LarkError as e:
        logger.warning(
            "parse_failed",
            error=str(e).splitlines()[0] if str(e) else type(e).__name__,
            line=getattr(e, "line", None),
            column=getattr(e, "column", None),
        )
        return []

    return extract_symbols(tree, content)


def extract_symbols(tree: Optional[Tree], content: str) -> list[Symbol]:
    """Walk a parsed tree once, in document order, collecting declarations.

    Args:
        tree: Root produced by the Forge parser (None for a failed parse)
        content: The source text the tree was parsed from

    Returns:
        List of Symbol objects
    """
    if tree is None:
        return []

    lines = content.split("\n")
    symbols = []
    _walk_tree(tree, content, lines, symbols, None, None)

    return symbols


def _walk_tree(
    node,
    content: str,
    lines: list[str],
    symbols: list,
    sig_name: Optional[str],
    decl_name: Optional[str],
):
    """Recursively walk the tree and extract symbols.

    sig_name is the enclosing sig (owner of fields) and decl_name the
    enclosing pred or fun (owner of parameters). Both are plain arguments,
    so leaving a subtree restores them.
    """
    if not isinstance(node, Tree):
        return

    kind = node.data

    if kind == "sig_decl":
        names = _names(node)
        if names:
            symbols.extend(_sig_symbols(node, names, content, lines))
            sig_name = str(names[0])

    elif kind == "field_decl":
        if sig_name is not None:
            symbols.extend(_field_symbols(node, sig_name, content, lines))

    elif kind == "pred_decl":
        token = _name_token(node)
        if token is not None:
            params = _span_text(_child(node, "para_decls"), content)
            symbols.append(_make_symbol(
                token,
                SymbolKind.PREDICATE,
                detail=f"pred {token}{params}",
                documentation=extract_doc_comment(lines, token.line - 1),
            ))
            decl_name = str(token)

    elif kind == "fun_decl":
        token = _name_token(node)
        if token is not None:
            symbols.append(_make_symbol(
                token,
                SymbolKind.FUNCTION,
                detail=_fun_detail(node, token, content),
                documentation=extract_doc_comment(lines, token.line - 1),
            ))
            decl_name = str(token)

    elif kind == "quant_decl":
        type_text = _type_text(node, "set_kw", content)
        for token in _names(node):
            symbols.append(_make_symbol(token, SymbolKind.VARIABLE, detail=type_text))

    elif kind == "param_decl":
        type_text = _type_text(node, "param_mult", content)
        for token in _names(node):
            symbols.append(_make_symbol(
                token, SymbolKind.PARAMETER, detail=type_text, container=decl_name
            ))

    elif kind == "test_decl":
        token = _name_token(node)
        if token is not None:
            result = _last_token(node, "NAME")
            detail = f"{token} is {result}" if result is not None else None
            symbols.append(_make_symbol(token, SymbolKind.TEST, detail=detail))

    elif kind == "example_decl":
        token = _name_token(node)
        if token is not None:
            target = _span_text(_expr_after(node, "name"), content)
            detail = f"example {token} is {target}" if target else f"example {token}"
            symbols.append(_make_symbol(token, SymbolKind.EXAMPLE, detail=detail))

    # Recurse into children
    for child in node.children:
        _walk_tree(child, content, lines, symbols, sig_name, decl_name)


def _sig_symbols(node: Tree, names: list[Token], content: str, lines: list[str]) -> list[Symbol]:
    """One TYPE symbol per name in a sig declaration."""
    parts = []
    quals = _child(node, "sig_quals")
    if quals is not None:
        parts.extend(_span_text(q, content) for q in quals.children)
    parts.append("sig")
    parts.append(", ".join(str(t) for t in names))

    for label in ("sig_extends", "sig_in"):
        ext = _child(node, label)
        if ext is not None:
            parts.append(_span_text(ext, content))

    detail = " ".join(p for p in parts if p)
    documentation = extract_doc_comment(lines, names[0].line - 1)

    return [
        _make_symbol(token, SymbolKind.TYPE, detail=detail, documentation=documentation)
        for token in names
    ]


def _field_symbols(node: Tree, sig_name: str, content: str, lines: list[str]) -> list[Symbol]:
    """One FIELD symbol per name in a field declaration."""
    names = _names(node)
    if not names:
        return []

    type_text = _type_text(node, "field_mult", content)
    detail = f"field in {sig_name}: {type_text}" if type_text else f"field in {sig_name}"
    documentation = extract_doc_comment(lines, names[0].line - 1)

    return [
        _make_symbol(
            token,
            SymbolKind.FIELD,
            detail=detail,
            documentation=documentation,
            container=sig_name,
        )
        for token in names
    ]


def _fun_detail(node: Tree, token: Token, content: str) -> str:
    """Render "fun name[params]: mult type" from the first result expression."""
    params = _span_text(_child(node, "para_decls"), content)
    detail = f"fun {token}{params}"

    result = _type_text(node, "fun_mult", content, after="para_decls")
    if result:
        detail += f": {result}"
    return detail


def _make_symbol(
    token: Token,
    kind: SymbolKind,
    detail: Optional[str] = None,
    documentation: Optional[str] = None,
    container: Optional[str] = None,
) -> Symbol:
    """Create a Symbol spanning the identifier token.

    Lark reports 1-based lines and columns; ranges are 0-based.
    """
    line = token.line - 1
    column = token.column - 1
    name = str(token)

    return Symbol(
        name=name,
        kind=kind,
        range=Range.create(line, column, line, column + len(name)),
        detail=detail or None,
        documentation=documentation,
        container=container,
    )


def _child(node: Tree, data: str) -> Optional[Tree]:
    """First direct subtree labelled ``data``."""
    for child in node.children:
        if isinstance(child, Tree) and child.data == data:
            return child
    return None


def _name_token(node: Tree) -> Optional[Token]:
    """Identifier token of a single-name declaration."""
    name = _child(node, "name")
    if name is None:
        return None
    return _first_token(name, "NAME")


def _names(node: Tree) -> list[Token]:
    """Identifier tokens of a name list, in order."""
    name_list = _child(node, "name_list")
    if name_list is None:
        return []

    tokens = []
    for child in name_list.children:
        if isinstance(child, Tree) and child.data == "name":
            token = _first_token(child, "NAME")
            if token is not None:
                tokens.append(token)
    return tokens


def _first_token(node: Tree, type_: str) -> Optional[Token]:
    for child in node.children:
        if isinstance(child, Token) and child.type == type_:
            return child
    return None


def _last_token(node: Tree, type_: str) -> Optional[Token]:
    for child in reversed(node.children):
        if isinstance(child, Token) and child.type == type_:
            return child
    return None


def _type_text(node: Tree, mult_rule: str, content: str, after: str = "name_list") -> str:
    """Text of "[mult] type-expr" for a declaration.

    The multiplicity keyword (if any) and the first expression following
    ``after`` are rendered from their source spans.
    """
    mult = _child(node, mult_rule)
    expr = _expr_after(node, after, skip=mult_rule)

    parts = []
    if mult is not None:
        parts.append(_span_text(mult, content))
    if expr is not None:
        parts.append(_span_text(expr, content))
    return " ".join(p for p in parts if p)


_DECL_PARTS = {
    "name", "name_list", "para_decls", "disj_kw", "var_kw", "set_kw",
    "field_mult", "param_mult", "fun_mult",
}


def _expr_after(node: Tree, after: str, skip: Optional[str] = None):
    """First expression child following the ``after`` subtree.

    When ``after`` is absent (e.g. a fun without parameters), the search
    starts right after the declared name.
    """
    children = node.children
    start = None
    for i, child in enumerate(children):
        if isinstance(child, Tree) and child.data == after:
            start = i + 1
            break
    if start is None:
        for i, child in enumerate(children):
            if isinstance(child, Tree) and child.data in ("name", "name_list"):
                start = i + 1
        if start is None:
            return None

    for child in children[start:]:
        if child is None:
            continue
        if isinstance(child, Tree) and (child.data in _DECL_PARTS or child.data == skip):
            continue
        return child
    return None


def _span_text(node, content: str) -> str:
    """Source text under a tree or token, with whitespace collapsed."""
    if node is None:
        return ""

    if isinstance(node, Token):
        start, end = node.start_pos, node.end_pos
    else:
        meta = node.meta
        if meta.empty:
            return ""
        start, end = meta.start_pos, meta.end_pos

    if start is None or end is None:
        return ""
    return " ".join(content[start:end].split())
