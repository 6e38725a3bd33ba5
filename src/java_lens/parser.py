# --- Grammar parser adapter ---------------------------------------------------
import logging
from typing import Optional, Protocol

from tree_sitter import Language, Parser

from java_lens.errors import JavaParseError
from java_lens.models.syntax import SyntaxNode
from java_lens.tree_sitter_helpers import (
    byte_to_char_map,
    first_error_byte,
    load_java_language,
    to_syntax_tree,
)

logger = logging.getLogger(__name__)


class SourceParser(Protocol):
    """Anything that turns Java text into a SyntaxNode tree (or raises JavaParseError)."""

    def parse(self, source: str) -> SyntaxNode:
        ...


class JavaParser:
    """
    Parses Java with tree-sitter and hands back the generic SyntaxNode tree.

    Tree-sitter always produces *some* tree, marking the broken parts with
    ERROR/MISSING nodes. We treat any of those as a failed parse, so callers
    never summarize half-understood code.
    """

    def __init__(self, language: Optional[Language] = None):
        self.language = language or load_java_language()
        self.parser = Parser(self.language)

    def parse(self, source: str) -> SyntaxNode:
        source_bytes = source.encode("utf-8", errors="surrogatepass")
        tree = self.parser.parse(source_bytes)
        root = tree.root_node
        char_map = byte_to_char_map(source)
        if root.has_error:
            error_byte = first_error_byte(root)
            offset = error_byte if char_map is None else char_map[error_byte]
            raise JavaParseError(f"syntax error near offset {offset}", offset=offset)
        return to_syntax_tree(root, source_bytes, char_map)
