# --- Tree-sitter plumbing ----------------------------------------------------
"""
Turns tree-sitter's Java tree into the generic SyntaxNode/SyntaxToken model.

Leaf nodes become tokens. Every other node becomes a SyntaxNode whose slots
are keyed by the grammar's field name when it has one ("name", "body",
"parameters", ...) and by the child's node type otherwise ("modifiers",
"formal_parameter", ...). Offsets are converted from bytes to str indices so
callers can slice the original Python string directly.
"""
import logging
from typing import Optional

from tree_sitter import Language, Node

from java_lens.errors import GrammarUnavailableError
from java_lens.models.syntax import SyntaxNode, SyntaxToken

logger = logging.getLogger(__name__)

_java_language: Optional[Language] = None


def load_java_language() -> Language:
    """
    Loads the prebuilt Java grammar shipped by the tree-sitter-java package.
    Cached after the first call.
    """
    global _java_language
    if _java_language is not None:
        return _java_language
    try:
        import tree_sitter_java
    except ImportError as e:
        raise GrammarUnavailableError(
            "Could not load Java grammar.\n"
            "- Install it with: pip install tree-sitter-java"
        ) from e
    _java_language = Language(tree_sitter_java.language())
    return _java_language


def byte_to_char_map(source: str) -> Optional[list[int]]:
    """
    Maps UTF-8 byte offsets to str indices. Returns None for pure-ASCII
    sources, where both are the same.
    """
    if source.isascii():
        return None
    mapping: list[int] = []
    for index, ch in enumerate(source):
        mapping.extend([index] * len(ch.encode("utf-8", errors="surrogatepass")))
    mapping.append(len(source))
    return mapping


def node_text(source_bytes: bytes, node: Node) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def first_error_byte(node: Node) -> int:
    """Start byte of the first ERROR or MISSING node under `node` (pre-order)."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current.start_byte
        if current.has_error:
            stack.extend(reversed(current.children))
    return node.start_byte


def to_syntax_tree(node: Node, source_bytes: bytes, char_map: Optional[list[int]] = None) -> SyntaxNode:
    """
    Converts a tree-sitter node (normally the root) into a SyntaxNode.

    Iterative: one cursor plus a stack of open nodes. Nesting depth is
    unbounded (a long `a + b + c ...` chain nests once per term).
    """

    def to_char(byte_offset: int) -> int:
        return byte_offset if char_map is None else char_map[byte_offset]

    root = SyntaxNode(name=node.type, children={})
    cursor = node.walk()
    if not cursor.goto_first_child():
        return root

    # Children dicts of the nodes the cursor is currently inside
    open_children = [root.children]
    while True:
        child = cursor.node
        slot = cursor.field_name or child.type
        if child.child_count == 0:
            # Zero-width leaves (MISSING tokens) carry no source text
            if child.end_byte > child.start_byte:
                start = to_char(child.start_byte)
                end = to_char(child.end_byte) - 1
                open_children[-1].setdefault(slot, []).append(SyntaxToken(
                    image=node_text(source_bytes, child),
                    start_offset=start,
                    end_offset=end if end > start else None,
                ))
        else:
            converted = SyntaxNode(name=child.type, children={})
            open_children[-1].setdefault(slot, []).append(converted)
            open_children.append(converted.children)
            cursor.goto_first_child()
            continue

        while not cursor.goto_next_sibling():
            if len(open_children) == 1:
                return root
            cursor.goto_parent()
            open_children.pop()
