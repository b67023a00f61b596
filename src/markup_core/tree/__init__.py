"""Immutable markup tree model and its canonical serializer.

Key Components:
    Text: Leaf node holding raw character content
    Element: Tagged node with an unordered attribute store and ordered children
    render: Deterministic indented rendering of a tree
    TreeSerializer: Configurable rendering with logging and metrics
"""

from .node import (
    AttributeMap,
    Element,
    Node,
    Text,
    iter_nodes,
    make_element,
    make_text,
)
from .serializer import TreeSerializer, render, with_indent

__all__ = [
    "AttributeMap",
    "Element",
    "Node",
    "Text",
    "iter_nodes",
    "make_element",
    "make_text",
    "TreeSerializer",
    "render",
    "with_indent",
]
