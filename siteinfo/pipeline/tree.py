"""Arena-backed document tree and head lookup.

Nodes live in a flat list and refer to each other by index, so walking a
deeply nested (or hostile) document never recurses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class NodeKind(str, Enum):
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    OTHER = "other"


@dataclass
class Node:
    index: int
    kind: NodeKind
    tag: str = ""
    attrs: tuple[tuple[str, str], ...] = ()
    text: str = ""
    parent: int | None = None
    children: list[int] = field(default_factory=list)

    def is_element(self, tag: str) -> bool:
        return self.kind is NodeKind.ELEMENT and self.tag == tag

    def attributes(self) -> dict[str, str]:
        """Attribute mapping; a repeated name keeps its last value."""
        return dict(self.attrs)


class DocumentTree:
    """Ordered arena of nodes; index 0 is the document root."""

    def __init__(self) -> None:
        self.nodes: list[Node] = [Node(index=0, kind=NodeKind.DOCUMENT)]

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def add(
        self,
        parent: Node,
        kind: NodeKind,
        *,
        tag: str = "",
        attrs: tuple[tuple[str, str], ...] = (),
        text: str = "",
    ) -> Node:
        """Append a node as the last child of *parent* and return it."""
        node = Node(
            index=len(self.nodes),
            kind=kind,
            tag=tag,
            attrs=attrs,
            text=text,
            parent=parent.index,
        )
        self.nodes.append(node)
        parent.children.append(node.index)
        return node

    def add_element(self, parent: Node, tag: str, **attrs: str) -> Node:
        return self.add(parent, NodeKind.ELEMENT, tag=tag, attrs=tuple(attrs.items()))

    def add_text(self, parent: Node, text: str) -> Node:
        return self.add(parent, NodeKind.TEXT, text=text)

    def children_of(self, node: Node) -> Iterator[Node]:
        for index in node.children:
            yield self.nodes[index]

    def first_child(self, node: Node) -> Node | None:
        if not node.children:
            return None
        return self.nodes[node.children[0]]


def find_head(tree: DocumentTree) -> Node | None:
    """Return the first ``head`` element in pre-order, or ``None``."""
    stack = [tree.root.index]
    while stack:
        node = tree.nodes[stack.pop()]
        if node.is_element("head"):
            return node
        stack.extend(reversed(node.children))
    return None
