"""Analysis modes, the tagged union every metric calculator dispatches on.

A file is analyzed either through its syntax tree (StructuralMode) or through
lexical patterns over its raw text (TextualMode). The choice is made once per
file by the parser adapter and the same value is handed to every calculator,
so one file's metrics never mix modes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from ..models import SourceFile

if TYPE_CHECKING:
    from tree_sitter import Tree


@dataclass(frozen=True)
class StructuralMode:
    """A file with a clean tree-sitter parse."""

    source: SourceFile
    tree: "Tree"
    language: str

    name = "structural"

    @property
    def text(self) -> str:
        return self.source.content

    @property
    def root(self) -> Any:
        return self.tree.root_node


@dataclass(frozen=True)
class TextualMode:
    """A file analyzed from raw text because no clean tree was available."""

    source: SourceFile
    reason: str = ""

    name = "textual"

    @property
    def text(self) -> str:
        return self.source.content


AnalysisMode = Union[StructuralMode, TextualMode]


def iter_nodes(root: Any):
    """Yield every node of a tree in document order without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_named_nodes(root: Any):
    """Like iter_nodes, but skips anonymous tokens such as keywords and
    punctuation.
    """
    for node in iter_nodes(root):
        if node.is_named:
            yield node
