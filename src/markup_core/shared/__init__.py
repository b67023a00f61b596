"""Shared utilities for markup_core.

This module provides configuration objects, diagnostic types and logging
helpers used by the serializer and the integration adapters.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    SerializationMetrics,
)
from .config import (
    AdapterConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    MarkupConfig,
    SerializerConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "SerializationMetrics",
    "AdapterConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "MarkupConfig",
    "SerializerConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
