"""Two-tier summaries: doc comment > detail fallback."""

from ..parser.symbols import Symbol


def extract_summary_from_documentation(documentation: str) -> str:
    """Extract first sentence from a doc comment.

    Takes the first line and truncates at first period.
    """
    if not documentation:
        return ""

    first_line = documentation.strip().split("\n")[0].strip()

    if "." in first_line:
        first_line = first_line[:first_line.index(".") + 1]

    return first_line[:120]


def detail_fallback(symbol: Symbol) -> str:
    """Generate summary from the rendered detail when there is no doc comment."""
    if symbol.detail:
        return symbol.detail[:120]
    return f"{symbol.kind.value} {symbol.name}"


def summarize_symbols(symbols: list[Symbol]) -> list[str]:
    """One summary per symbol, aligned with the input list."""
    summaries = []
    for sym in symbols:
        summary = ""
        if sym.documentation:
            summary = extract_summary_from_documentation(sym.documentation)
        if not summary:
            summary = detail_fallback(sym)
        summaries.append(summary)
    return summaries
