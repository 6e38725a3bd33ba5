# --- Generic syntax tree model ----------------------------------------------
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class SyntaxToken:
    """A leaf of the syntax tree: literal text plus its position in the source."""
    image: str  # literal token text, e.g. "public", "(", "onStart"
    start_offset: int
    end_offset: Optional[int] = None  # inclusive; None means a one-character token

    @property
    def last_offset(self) -> int:
        return self.start_offset if self.end_offset is None else self.end_offset


@dataclass(frozen=True)
class SyntaxNode:
    """A named interior node. Children are grouped by slot name, in insertion order."""
    name: str  # grammar node type, e.g. "method_declaration"
    children: dict[str, list["SyntaxElement"]] = field(default_factory=dict)

    def slot(self, slot_name: str) -> list["SyntaxElement"]:
        return self.children.get(slot_name, [])


SyntaxElement = Union[SyntaxNode, SyntaxToken]
