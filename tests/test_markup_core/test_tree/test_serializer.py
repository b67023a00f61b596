"""Tests for the canonical tree serializer."""

import logging

import pytest

from markup_core import MarkupConfig
from markup_core.shared import SerializerConfig
from markup_core.tree import (
    Element,
    TreeSerializer,
    make_element,
    make_text,
    render,
    with_indent,
)

LIST_TREE_OUTPUT = (
    '<div onclick="func" width="100%">\n'
    "  <ul>\n"
    '    <li align="left">\n'
    "      1\n"
    "    </li>\n"
    '    <li align="left">\n'
    "      2\n"
    "    </li>\n"
    '    <li align="left">\n'
    "      3\n"
    "    </li>\n"
    "  </ul>\n"
    "</div>"
)


def _list_tree() -> Element:
    items = [
        make_element("li", {"align": "left"}, [make_text(str(number))])
        for number in range(1, 4)
    ]
    return make_element(
        "div",
        {"width": "100%", "onclick": "func"},
        [make_element("ul", {}, items)],
    )


class TestWithIndent:
    """Test the indentation helper."""

    def test_zero_indent(self) -> None:
        """Test that level 0 adds nothing."""
        assert with_indent(0, "test") == "test"

    def test_three_levels(self) -> None:
        """Test that each level adds two spaces."""
        assert with_indent(3, "test") == "      test"

    def test_custom_width(self) -> None:
        """Test indentation with a different width."""
        assert with_indent(2, "x", width=4) == "        x"


class TestRender:
    """Test the pure render function."""

    def test_minimal_element(self) -> None:
        """Test an element without attributes or children."""
        assert render(make_element("p", {}, [])) == "<p></p>"

    def test_text_node(self) -> None:
        """Test that text is indented and emitted verbatim."""
        assert render(make_text("a < b & c"), 2) == "    a < b & c"

    def test_simple_nesting(self) -> None:
        """Test an element with one empty child element."""
        node = make_element("p", {}, [make_element("span")])

        assert render(node) == "<p>\n  <span></span>\n</p>"

    def test_text_child_with_attribute(self) -> None:
        """Test the basic paragraph case."""
        node = make_element("p", {"width": "100%"}, [make_text("Lorem Ipsum...")])

        assert render(node) == '<p width="100%">\n  Lorem Ipsum...\n</p>'

    def test_three_level_nesting(self) -> None:
        """Test indentation across div/ul/li nesting."""
        assert render(_list_tree()) == LIST_TREE_OUTPUT

    def test_attributes_sorted_regardless_of_insertion_order(self) -> None:
        """Test that attribute output is independent of insertion order."""
        first = make_element("div", {"onclick": "func", "width": "100%"})
        second = make_element("div", {"width": "100%", "onclick": "func"})

        assert render(first) == render(second) == '<div onclick="func" width="100%"></div>'

    def test_attributes_sorted_by_code_point(self) -> None:
        """Test that uppercase names sort before lowercase ones."""
        node = make_element("a", {"b": "2", "B": "1", "a": "3"})

        assert render(node) == '<a B="1" a="3" b="2"></a>'

    def test_attribute_values_not_escaped(self) -> None:
        """Test that values are emitted verbatim."""
        node = make_element("a", {"title": 'say "hi" & <go>'})

        assert render(node) == '<a title="say "hi" & <go>"></a>'

    def test_render_is_repeatable(self) -> None:
        """Test that repeated renders are identical."""
        tree = _list_tree()

        assert len({render(tree) for _ in range(5)}) == 1

    def test_render_at_nested_level(self) -> None:
        """Test rendering a subtree at a starting indent level."""
        node = make_element("li", {}, [make_text("x")])

        assert render(node, 1) == "  <li>\n    x\n  </li>"

    def test_mixed_children(self) -> None:
        """Test text and element siblings each on their own line."""
        node = make_element(
            "p", {}, [make_text("a"), make_element("br"), make_text("b")]
        )

        assert render(node) == "<p>\n  a\n  <br></br>\n  b\n</p>"

    def test_empty_tag_renders_without_error(self) -> None:
        """Test that an invalid tree still renders."""
        assert render(make_element("")) == "<></>"


class TestTreeSerializer:
    """Test the configurable serializer wrapper."""

    def test_default_matches_render(self) -> None:
        """Test that default configuration reproduces render()."""
        tree = _list_tree()

        assert TreeSerializer().serialize(tree) == render(tree)

    def test_custom_indent_width(self) -> None:
        """Test indentation with four spaces per level."""
        serializer = TreeSerializer(SerializerConfig(indent_width=4))
        node = make_element("p", {}, [make_text("x")])

        assert serializer.serialize(node) == "<p>\n    x\n</p>"

    def test_custom_line_separator(self) -> None:
        """Test a Windows line separator."""
        serializer = TreeSerializer(SerializerConfig(line_separator="\r\n"))
        node = make_element("p", {}, [make_text("x")])

        assert serializer.serialize(node) == "<p>\r\n  x\r\n</p>"

    def test_from_config_compact_preset(self) -> None:
        """Test building a serializer from a configuration preset."""
        serializer = TreeSerializer.from_config(MarkupConfig.compact(), "req-1")
        node = make_element("p", {}, [make_text("x")])

        assert serializer.serialize(node) == "<p>\nx\n</p>"
        assert serializer.correlation_id == "req-1"

    def test_from_config_without_correlation_tracking(self) -> None:
        """Test that correlation IDs are dropped when tracking is disabled."""
        config = MarkupConfig().override(global___enable_correlation_tracking=False)

        serializer = TreeSerializer.from_config(config, "req-1")

        assert serializer.correlation_id is None

    def test_from_config_applies_logging_level(self) -> None:
        """Test that the verbose preset turns on debug logging."""
        logging.getLogger("markup_core").setLevel(logging.WARNING)

        serializer = TreeSerializer.from_config(MarkupConfig.verbose())

        assert logging.getLogger("markup_core").isEnabledFor(logging.DEBUG)
        assert serializer._logger.is_enabled_for(logging.DEBUG)

    def test_metrics_recorded(self) -> None:
        """Test metrics for the last serialized tree."""
        serializer = TreeSerializer()
        output = serializer.serialize(_list_tree())

        metrics = serializer.last_metrics
        assert metrics is not None
        assert metrics.element_count == 5
        assert metrics.text_count == 3
        assert metrics.node_count == 8
        assert metrics.attribute_count == 5
        assert metrics.max_depth == 3
        assert metrics.output_length == len(output)
        assert metrics.processing_time_ms >= 0.0

    def test_debug_log_carries_correlation(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that serialization logs a debug record with correlation info."""
        serializer = TreeSerializer(correlation_id="abc")

        with caplog.at_level(logging.DEBUG, logger="markup_core"):
            serializer.serialize(make_element("p"))

        records = [r for r in caplog.records if r.getMessage() == "Serialized markup tree"]
        assert len(records) == 1
        assert records[0].correlation_id == "abc"
        assert records[0].component == "serializer"
        assert records[0].node_count == 1
