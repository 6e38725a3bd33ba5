# --- Lock hazard detection ---------------------------------------------------
"""
Flags risky calls inside `synchronized` blocks. Works on raw text on purpose:
it has no idea about comments or string literals, so hazard-looking text
inside either is reported too.
"""
import re

from java_lens.line_index import build_line_index, offset_to_line
from java_lens.models.ast_models import ConcurrencyWarning, SourceRange

SYNCHRONIZED_RE = re.compile(r"\bsynchronized\b")

HAZARDS = (
    (re.compile(r"(transact\s*\(|linkToDeath\s*\(|asBinder\s*\(|queryLocalInterface\s*\()"),
     "Binder call inside a lock may block other threads."),
    (re.compile(r"\b(post|postDelayed|sendMessage|sendMessageAtTime)\s*\("),
     "Posting or sending a message inside a lock can invert lock ordering."),
    (SYNCHRONIZED_RE,
     "Nested lock blocks detected."),
)


def find_synchronized_blocks(text: str) -> list[tuple[int, int, int]]:
    """
    (keyword_offset, body_start, body_end) for each `synchronized` followed by
    a braced block. body_start is just past "{" and body_end is the matching
    "}". Unterminated blocks are skipped.
    """
    blocks = []
    for match in SYNCHRONIZED_RE.finditer(text):
        brace = text.find("{", match.end())
        if brace == -1:
            continue
        depth = 1
        for i in range(brace + 1, len(text)):
            ch = text[i]
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    blocks.append((match.start(), brace + 1, i))
                    break
    return blocks


def analyze_concurrency_warnings(text: str) -> list[ConcurrencyWarning]:
    """One warning per hazard kind found in each synchronized block."""
    line_starts = build_line_index(text)
    warnings = []
    for keyword_offset, body_start, body_end in find_synchronized_blocks(text):
        block_text = text[body_start:body_end]
        line = offset_to_line(keyword_offset, line_starts)
        for pattern, message in HAZARDS:
            if pattern.search(block_text):
                warnings.append(ConcurrencyWarning(
                    range=SourceRange(keyword_offset, body_end + 1),
                    line=line,
                    message=message,
                ))
    return warnings
