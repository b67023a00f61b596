"""Markup Core.

Building blocks for markup parsers: a forward-only text cursor that
tokenizers drive character by character, an immutable tree of text and element
nodes, and a canonical serializer that renders such a tree to deterministic,
indented text.

Typical use:
- Scan input with TextCursor and build nodes bottom-up with make_text() and
  make_element()
- Render a finished tree with render() or TreeSerializer
- Hand a tree to another library through the adapters in markup_core.api
"""

__version__ = "0.1.0"
__author__ = "Markup Core Team"

from .character.cursor import TextCursor
from .shared.config import MarkupConfig, SerializerConfig
from .tree.node import Element, Node, Text, iter_nodes, make_element, make_text
from .tree.serializer import TreeSerializer, render

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Scanning
    "TextCursor",

    # Tree model
    "Element",
    "Node",
    "Text",
    "iter_nodes",
    "make_element",
    "make_text",

    # Serialization
    "TreeSerializer",
    "render",

    # Configuration
    "MarkupConfig",
    "SerializerConfig",
]
