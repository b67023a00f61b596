"""Immutable markup tree model.

A tree is built bottom-up from two node kinds: :class:`Text` leaves and
:class:`Element` nodes carrying a tag name, an unordered attribute store and an
ordered tuple of children. Both are frozen dataclasses; :data:`Node` is their
closed union and callers dispatch on it with ``isinstance``.

Nodes are never validated here. Well-formedness (for example a non-empty tag
name) is the tokenizer's responsibility; an invalid tree still renders, it just
looks odd.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

AttributeMap = Mapping[str, str]

_EMPTY_ATTRIBUTES: AttributeMap = MappingProxyType({})


@dataclass(frozen=True)
class Text:
    """Leaf node holding raw character content."""

    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        return {"type": "text", "content": self.content}

    def __str__(self) -> str:
        from .serializer import render

        return render(self)


@dataclass(frozen=True)
class Element:
    """Tagged node with attributes and owned children."""

    tag: str
    attributes: AttributeMap = field(
        default_factory=lambda: _EMPTY_ATTRIBUTES, hash=False
    )
    children: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        """Copy attributes and children into immutable containers.

        A passed-in ``MappingProxyType`` is copied too, since it is only a view
        over a dict the caller may still change.
        """
        if self.attributes is not _EMPTY_ATTRIBUTES:
            object.__setattr__(
                self, "attributes", MappingProxyType(dict(self.attributes))
            )
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    @property
    def child_elements(self) -> List["Element"]:
        """Direct children that are elements."""
        return [child for child in self.children if isinstance(child, Element)]

    @property
    def text_content(self) -> str:
        """Concatenated content of every descendant text node, in order."""
        return "".join(
            node.content for node in iter_nodes(self) if isinstance(node, Text)
        )

    def find(self, tag: str) -> Optional["Element"]:
        """Find first descendant element with matching tag name (pre-order)."""
        for node in iter_nodes(self):
            if node is not self and isinstance(node, Element) and node.tag == tag:
                return node
        return None

    def find_all(self, tag: str) -> List["Element"]:
        """Find all descendant elements with matching tag name."""
        return [
            node for node in iter_nodes(self)
            if node is not self and isinstance(node, Element) and node.tag == tag
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "type": "element",
            "tag": self.tag,
            "attributes": dict(self.attributes),
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def __str__(self) -> str:
        from .serializer import render

        return render(self)


Node = Union[Text, Element]


def make_text(content: str) -> Text:
    """Build a text leaf; content is kept verbatim."""
    return Text(content)


def make_element(
    tag: str,
    attributes: Optional[Mapping[str, str]] = None,
    children: Optional[Iterable[Node]] = None,
) -> Element:
    """Build an element from fully known attributes and children.

    Attributes are copied into a read-only mapping and children into a tuple,
    in the order given. No tag or attribute validation is performed.
    """
    return Element(
        tag,
        attributes or _EMPTY_ATTRIBUTES,
        tuple(children or ()),
    )


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document (pre-order) order."""
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Element):
            stack.extend(reversed(current.children))
