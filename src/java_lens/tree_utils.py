# --- Generic syntax tree helpers --------------------------------------------
"""
Walks a SyntaxNode/SyntaxToken tree without knowing anything about Java.
Anything grammar-specific lives in the callers (summarizer, lifecycle).

Every walk uses an explicit stack: tree depth follows expression nesting and
can exceed Python's recursion limit.
"""
from typing import Iterator, Optional

from java_lens.models.syntax import SyntaxElement, SyntaxNode, SyntaxToken


def iter_children(node: SyntaxNode) -> Iterator[SyntaxElement]:
    """Yields every direct child in slot order."""
    for elements in node.children.values():
        yield from elements


def _collect(elements: list[SyntaxElement], out: list[SyntaxToken]) -> list[SyntaxToken]:
    stack = list(reversed(elements))
    while stack:
        element = stack.pop()
        if isinstance(element, SyntaxToken):
            out.append(element)
        else:
            stack.extend(reversed(list(iter_children(element))))
    return out


def collect_tokens(node: SyntaxNode, out: Optional[list[SyntaxToken]] = None) -> list[SyntaxToken]:
    """
    Depth-first collection of every token under `node`, in slot order.
    Slot order is not source order; sort by start_offset when that matters.
    """
    return _collect(list(iter_children(node)), [] if out is None else out)


def collect_slot_tokens(elements: list[SyntaxElement]) -> list[SyntaxToken]:
    """Same as collect_tokens, but for the contents of one slot."""
    return _collect(elements, [])


def _iter_nodes(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Pre-order over `node` and every node below it."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed([e for e in iter_children(current) if isinstance(e, SyntaxNode)]))


def find_first_node(node: SyntaxNode, name: str) -> Optional[SyntaxNode]:
    """Pre-order search; the node itself counts."""
    return next((n for n in _iter_nodes(node) if n.name == name), None)


def find_all_nodes(node: SyntaxNode, name: str, out: Optional[list[SyntaxNode]] = None) -> list[SyntaxNode]:
    """
    Pre-order collection of every node called `name`, nested matches included
    (searching for class declarations also yields inner classes).
    """
    if out is None:
        out = []
    out.extend(n for n in _iter_nodes(node) if n.name == name)
    return out


def tokens_to_text(tokens: list[SyntaxToken], source: str) -> str:
    """
    Rebuilds the source text spanned by `tokens` (first start to last end,
    inclusive), trimmed. Whatever sits between the tokens (whitespace,
    comments) comes along with it.
    """
    if not tokens:
        return ""
    ordered = sorted(tokens, key=lambda t: t.start_offset)
    return source[ordered[0].start_offset:ordered[-1].last_offset + 1].strip()


def node_range(node: SyntaxNode) -> Optional[tuple[int, int]]:
    """(start, exclusive end) covered by a node's tokens, or None when it has none."""
    tokens = collect_tokens(node)
    if not tokens:
        return None
    start = min(t.start_offset for t in tokens)
    end = max(t.last_offset for t in tokens) + 1
    return start, end
