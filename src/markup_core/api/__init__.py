"""Conversions between markup trees and other libraries' object models."""

from .adapters import (
    AdapterMetadata,
    AdapterPerformanceProfiler,
    AdapterRegistry,
    AdapterType,
    BeautifulSoupAdapter,
    ConversionDirection,
    ConversionResult,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    get_adapters_by_type,
    list_available_adapters,
    register_adapter,
)

__all__ = [
    "AdapterMetadata",
    "AdapterPerformanceProfiler",
    "AdapterRegistry",
    "AdapterType",
    "BeautifulSoupAdapter",
    "ConversionDirection",
    "ConversionResult",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "get_adapter",
    "get_adapters_by_type",
    "list_available_adapters",
    "register_adapter",
]
