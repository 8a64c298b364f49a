"""Backward scan for /** ... */ doc comments above a declaration."""

from typing import Optional

DOC_OPEN = "/**"
BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"


def extract_doc_comment(lines: list[str], declaration_line: int) -> Optional[str]:
    """Find the doc comment that immediately precedes a declaration.

    Only blank lines may sit between the comment and the declaration, and
    only blocks opened with ``/**`` qualify. Plain ``/* */`` blocks, line
    comments, unterminated blocks and runs that cross a second ``*/`` all
    yield None.

    Args:
        lines: Source text split on newlines
        declaration_line: Zero-based line of the declaration's identifier

    Returns:
        Cleaned comment text, or None
    """
    end = declaration_line - 1
    while end >= 0 and not lines[end].strip():
        end -= 1
    if end < 0:
        return None

    nearest = lines[end]
    if BLOCK_CLOSE not in nearest and DOC_OPEN not in nearest:
        return None
    if BLOCK_CLOSE not in nearest:
        # Opener with no close right above the name: unterminated
        return None

    collected = []
    for i in range(end, -1, -1):
        line = lines[i]
        if i == end:
            segment = line[:line.rfind(BLOCK_CLOSE)]
        elif BLOCK_CLOSE in line:
            return None
        else:
            segment = line

        opener = segment.rfind(BLOCK_OPEN)
        if opener != -1:
            if not segment.startswith(DOC_OPEN, opener):
                return None
            collected.append(line)
            break
        collected.append(line)
    else:
        return None

    collected.reverse()
    return clean_doc_comment(collected)


def clean_doc_comment(block_lines: list[str]) -> Optional[str]:
    """Strip the markers from a /** ... */ block given as raw source lines.

    The first line must hold the opener and the last line the close marker.
    """
    if not block_lines:
        return None

    text = "\n".join(block_lines)
    first = block_lines[0]
    close_at = text.rfind(BLOCK_CLOSE)
    open_at = first.rfind(DOC_OPEN, 0, close_at if len(block_lines) == 1 else len(first))
    if open_at == -1 or close_at == -1:
        return None

    interior = text[open_at + len(DOC_OPEN):close_at]

    cleaned = []
    for line in interior.split("\n"):
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
        cleaned.append(line.strip())

    result = "\n".join(cleaned).strip()
    return result or None
