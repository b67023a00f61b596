"""Canonical indented serializer for markup trees.

:func:`render` turns a tree into deterministic text, two spaces per nesting
level::

    <div onclick="func" width="100%">
      <ul>
        <li align="left">
          1
        </li>
      </ul>
    </div>

Attributes are sorted by name at render time because the attribute store has
no meaningful order. Text and attribute values are emitted verbatim; this is a
debugging and testing format, not a markup re-emitter.
"""

import time
from typing import Optional

from markup_core.shared import (
    MarkupConfig,
    SerializationMetrics,
    SerializerConfig,
    get_logger,
)

from .node import Node, Text

DEFAULT_INDENT_WIDTH = 2


def with_indent(indent_level: int, text: str, width: int = DEFAULT_INDENT_WIDTH) -> str:
    """Prefix ``text`` with ``indent_level * width`` spaces."""
    return " " * (indent_level * width) + text


def _render(node: Node, indent_level: int, width: int, separator: str) -> str:
    if isinstance(node, Text):
        return with_indent(indent_level, node.content, width)

    parts = [with_indent(indent_level, "<" + node.tag, width)]
    for name, value in sorted(node.attributes.items()):
        parts.append(f' {name}="{value}"')
    parts.append(">")

    if node.children:
        rendered_children = [
            _render(child, indent_level + 1, width, separator)
            for child in node.children
        ]
        parts.append(separator)
        parts.append(separator.join(rendered_children))
        parts.append(separator)
        parts.append(with_indent(indent_level, f"</{node.tag}>", width))
    else:
        parts.append(f"</{node.tag}>")

    return "".join(parts)


def render(node: Node, indent_level: int = 0) -> str:
    """Render ``node`` starting at ``indent_level``.

    Elements without children close on the same line (``<p></p>``); elements
    with children put each child on its own line one level deeper.
    """
    return _render(node, indent_level, DEFAULT_INDENT_WIDTH, "\n")


def _collect_metrics(node: Node, depth: int, metrics: SerializationMetrics) -> None:
    metrics.max_depth = max(metrics.max_depth, depth)
    if isinstance(node, Text):
        metrics.text_count += 1
        return
    metrics.element_count += 1
    metrics.attribute_count += len(node.attributes)
    for child in node.children:
        _collect_metrics(child, depth + 1, metrics)


class TreeSerializer:
    """Configurable serializer with logging and per-call metrics.

    With the default configuration :meth:`serialize` produces exactly the
    output of :func:`render` at level 0.
    """

    def __init__(
        self,
        config: Optional[SerializerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or SerializerConfig()
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "serializer")
        self.last_metrics: Optional[SerializationMetrics] = None

    @classmethod
    def from_config(
        cls, config: MarkupConfig, correlation_id: Optional[str] = None
    ) -> "TreeSerializer":
        """Build a serializer from the serializer section of ``config``.

        Also applies the configured package logging level.
        """
        config.apply_logging()
        if not config.global_.enable_correlation_tracking:
            correlation_id = None
        return cls(config.serializer, correlation_id)

    def serialize(self, node: Node, indent_level: int = 0) -> str:
        """Render ``node`` using the configured indentation and separator."""
        start_time = time.time()
        output = _render(
            node,
            indent_level,
            self.config.indent_width,
            self.config.line_separator,
        )

        metrics = SerializationMetrics(output_length=len(output))
        _collect_metrics(node, 0, metrics)
        metrics.processing_time_ms = (time.time() - start_time) * 1000
        self.last_metrics = metrics

        self._logger.debug(
            "Serialized markup tree",
            extra={
                "node_count": metrics.node_count,
                "max_depth": metrics.max_depth,
                "output_length": metrics.output_length,
                "processing_time_ms": metrics.processing_time_ms,
            },
        )
        return output

