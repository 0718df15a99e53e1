"""
Generic XML document tree used by the client.

GPO sitemaps and BILLSTATUS files are parsed with lxml and copied into plain
``Node`` objects: each node keeps its local tag name, its attributes, and its
text and child elements in document order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Union

from lxml import etree as ET

from .errors import MalformedDocument

Value = Union["Node", str]

# no DTD/entity expansion or network access for documents fetched off the web
_PARSER = ET.XMLParser(resolve_entities=False, no_network=True)


@dataclass
class Node:
    name: str
    value: List[Value] = field(default_factory=list)
    attrs: Dict[str, str] = field(default_factory=dict)

    @property
    def children(self) -> List["Node"]:
        return [v for v in self.value if isinstance(v, Node)]

    @property
    def scalars(self) -> List[str]:
        return [v for v in self.value if isinstance(v, str)]

    def child(self, tag: str) -> "Node":
        """First direct child named ``tag``; raises MalformedDocument if there is none."""
        for c in self.children:
            if c.name == tag:
                return c
        raise MalformedDocument(f"<{self.name}> has no <{tag}>")

    def first_scalar(self) -> str:
        """Return the first text value of this node, or raise MalformedDocument."""
        for v in self.value:
            if isinstance(v, str):
                return v
        raise MalformedDocument(f"<{self.name}> has no text value")


def _append_text(node: Node, text) -> None:
    if text and text.strip():
        node.value.append(text.strip())


def _to_node(elem) -> Node:
    node = Node(
        name=ET.QName(elem).localname,
        attrs={ET.QName(k).localname: v for k, v in elem.attrib.items()},
    )
    _append_text(node, elem.text)
    for sub in elem:
        # comments and processing instructions have a non-string tag
        if isinstance(sub.tag, str):
            node.value.append(_to_node(sub))
        _append_text(node, sub.tail)
    return node


def parse(body: Union[bytes, str]) -> Node:
    """
    Parse an XML payload into a Node tree rooted at the document element.

    Raises:
        MalformedDocument: the payload is empty or not well-formed XML.
    """
    if not body:
        raise MalformedDocument("Empty document")
    if isinstance(body, str):
        body = body.encode("utf-8")
    try:
        root = ET.fromstring(body, parser=_PARSER)
    except ET.XMLSyntaxError as e:
        raise MalformedDocument(f"Invalid XML: {e}") from e
    return _to_node(root)


def iter_nodes(tree: Union[Node, List[Node]]) -> Iterator[Node]:
    """Depth-first, pre-order walk (document order)."""
    stack: List[Node] = [tree] if isinstance(tree, Node) else list(tree)
    stack.reverse()
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find(tree: Union[Node, List[Node], bytes, str], tag: str) -> List[Node]:
    """
    Return every node named ``tag`` anywhere in ``tree``, in document order.

    ``tree`` may be a Node, a list of Nodes, or a raw XML payload. Node names
    are local names, so namespaces never affect a match.
    """
    if isinstance(tree, (bytes, str)):
        tree = parse(tree)
    return [n for n in iter_nodes(tree) if n.name == tag]


def find_first(tree: Union[Node, List[Node]], tag: str) -> Node:
    """Like ``find`` but return only the first match, raising MalformedDocument if absent."""
    for node in iter_nodes(tree):
        if node.name == tag:
            return node
    raise MalformedDocument(f"Missing <{tag}>")
