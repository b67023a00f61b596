"""Diagnostic and metrics value types shared across markup_core.

The tree model and cursor never fail, so these types only describe what the
outer layers (serializer wrapper, adapters) observed while working.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class SerializationMetrics:
    """Shape and timing of one serialized tree."""

    element_count: int = 0
    text_count: int = 0
    attribute_count: int = 0
    max_depth: int = 0
    output_length: int = 0
    processing_time_ms: float = 0.0

    @property
    def node_count(self) -> int:
        """Total number of nodes rendered."""
        return self.element_count + self.text_count

    @property
    def characters_per_second(self) -> float:
        """Output characters produced per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.output_length * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a plain dictionary."""
        return {
            "element_count": self.element_count,
            "text_count": self.text_count,
            "attribute_count": self.attribute_count,
            "node_count": self.node_count,
            "max_depth": self.max_depth,
            "output_length": self.output_length,
            "processing_time_ms": self.processing_time_ms,
        }
