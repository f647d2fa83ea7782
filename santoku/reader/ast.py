"""Generic syntax tree produced by the parser and consumed by the reader.

The shape mirrors parser-combinator output: each node carries a tag naming
its grammar categories joined with `|` (e.g. `expr|number|regex`), the text it
matched, and its children in source order. The root is tagged `>`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

ROOT_TAG = ">"


@dataclass(frozen=True)
class AstNode:
    tag: str
    contents: str = ""
    children: List[AstNode] = field(default_factory=list)
    line: int = 1
    column: int = 1

    def pretty(self, indent: int = 0) -> str:
        """Indented dump of the tree, one node per line."""
        pad = "  " * indent
        text = f"{pad}{self.tag} '{self.contents}'" if self.contents else f"{pad}{self.tag}"
        lines = [text]
        lines.extend(child.pretty(indent + 1) for child in self.children)
        return "\n".join(lines)
