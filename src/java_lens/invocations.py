# --- Call-site scanning ------------------------------------------------------
"""
Finds method-call-like sites (`name(...)`) in raw text and counts their
arguments. This works on text, not on the tree, so it also picks up things
the grammar calls something else (constructor calls after `new`, calls inside
lambdas); the call graph only keeps the ones that match a declaration.
"""
import re

from java_lens.line_index import offset_to_line
from java_lens.models.ast_models import MethodDecl, MethodInvocation

CALL_RE = re.compile(r"(?<![\w$])([A-Za-z_$][\w$]*)\s*\(")

# Keywords that can sit right before "(" without being a call
CALL_KEYWORDS = frozenset({
    "if", "for", "while", "switch", "catch", "synchronized", "new", "return",
    "throw", "try", "else", "do", "case", "super", "this", "assert",
})

_OPENERS = {"(": 0, "<": 1, "[": 2, "{": 3}
_CLOSERS = {")": 0, ">": 1, "]": 2, "}": 3}


def is_call_keyword(name: str) -> bool:
    return name in CALL_KEYWORDS


def find_matching_paren(text: str, open_index: int) -> int:
    """
    Index of the ")" closing the "(" at `open_index`, or -1 if it never closes.
    Parentheses inside '...' / "..." literals are ignored; a backslash skips
    the next character inside a literal.
    """
    depth = 0
    quote = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\" and i + 1 < len(text):
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def count_arguments(text: str) -> int:
    """
    Number of comma-separated arguments at the top level of `text`.
    Commas inside (), <>, [] or {} (array initializers) don't count. Depths
    never go below zero, so stray closers in odd input are tolerated.
    """
    trimmed = text.strip()
    if not trimmed:
        return 0
    depths = [0, 0, 0, 0]
    count = 1
    for ch in trimmed:
        if ch in _OPENERS:
            depths[_OPENERS[ch]] += 1
        elif ch in _CLOSERS:
            kind = _CLOSERS[ch]
            depths[kind] = max(0, depths[kind] - 1)
        elif ch == "," and not any(depths):
            count += 1
    return count


def scan_invocations_in_text(text: str, base_offset: int, line_starts: list[int]) -> list[MethodInvocation]:
    """
    Every call-like site in `text`, in the order found. `base_offset` is where
    `text` starts in the file, so offsets and lines refer to the whole file.
    """
    invocations = []
    for match in CALL_RE.finditer(text):
        name = match.group(1)
        if is_call_keyword(name):
            continue
        open_index = match.end() - 1
        close_index = find_matching_paren(text, open_index)
        if close_index == -1:
            continue
        start_offset = base_offset + match.start()
        invocations.append(MethodInvocation(
            name=name,
            args_count=count_arguments(text[open_index + 1:close_index]),
            start_offset=start_offset,
            line=offset_to_line(start_offset, line_starts),
        ))
    return invocations


def extract_method_invocations(method_decls: tuple[MethodDecl, ...], source: str,
                               line_starts: list[int]) -> list[MethodInvocation]:
    """
    Scans the body of every method with one. A method nested inside another
    method's body (anonymous/local classes) is covered by both scans; each
    site is reported once, the first time it is seen.
    """
    invocations = []
    seen_offsets: set[int] = set()
    for method in method_decls:
        if not method.has_body:
            continue
        body_text = source[method.body_start_offset:method.body_end_offset]
        for invocation in scan_invocations_in_text(body_text, method.body_start_offset, line_starts):
            if invocation.start_offset in seen_offsets:
                continue
            seen_offsets.add(invocation.start_offset)
            invocations.append(invocation)
    return invocations
