"""Tests for diagnostic and metrics value types."""

import pytest

from markup_core.shared import DiagnosticEntry, DiagnosticSeverity, SerializationMetrics


class TestDiagnosticEntry:
    """Test DiagnosticEntry validation."""

    def test_valid_entry(self) -> None:
        """Test creating a diagnostic entry."""
        entry = DiagnosticEntry(DiagnosticSeverity.WARNING, "odd tag", "adapter")

        assert entry.severity is DiagnosticSeverity.WARNING
        assert entry.timestamp > 0

    def test_empty_message_raises_error(self) -> None:
        """Test that an empty message is rejected."""
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "adapter")

    def test_empty_component_raises_error(self) -> None:
        """Test that an empty component is rejected."""
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "message", "")


class TestSerializationMetrics:
    """Test derived metric values."""

    def test_node_count(self) -> None:
        """Test that node count sums elements and text."""
        assert SerializationMetrics(element_count=2, text_count=3).node_count == 5

    def test_characters_per_second(self) -> None:
        """Test throughput calculation and the zero-time case."""
        assert SerializationMetrics(output_length=500, processing_time_ms=250).characters_per_second == 2000.0
        assert SerializationMetrics(output_length=500).characters_per_second == 0.0

    def test_to_dict(self) -> None:
        """Test dictionary conversion includes derived counts."""
        data = SerializationMetrics(element_count=1, text_count=1).to_dict()

        assert data["node_count"] == 2
        assert data["max_depth"] == 0
