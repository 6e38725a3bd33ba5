# --- Offset -> line mapping -------------------------------------------------
from bisect import bisect_right


def build_line_index(source: str) -> list[int]:
    """
    Start offset of every line. Offset 0 is always there; each "\\n" adds the
    offset right after it.
    """
    line_starts = [0]
    pos = source.find("\n")
    while pos != -1:
        line_starts.append(pos + 1)
        pos = source.find("\n", pos + 1)
    return line_starts


def offset_to_line(offset: int, line_starts: list[int]) -> int:
    """1-based line containing `offset`. Offsets before the first line start map to line 1."""
    return max(1, bisect_right(line_starts, offset))
