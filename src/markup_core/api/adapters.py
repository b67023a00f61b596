"""Integration adapters between markup trees and popular XML/HTML libraries.

Adapters convert a finished :data:`~markup_core.tree.Node` tree into another
library's object model (``to_target``) and back (``from_target``). Conversions
never raise: failures are reported through :class:`ConversionResult` with
``success=False``, error messages and diagnostics.

ElementTree-style libraries keep character data in ``text``/``tail`` slots
rather than in child nodes. Text children before the first child element map to
the parent's ``text``; text after a child element maps to that element's
``tail``. Converting back yields ``Text`` children in document order.

lxml and BeautifulSoup are optional (the ``lxml`` and ``html`` extras); their
adapters report ``is_available() == False`` when the library is missing and
the registry then declines to hand them out.
"""

import threading
import time
import weakref
from abc import ABC, abstractmethod
from dataclasses import astuple, dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Type

from markup_core.shared import (
    AdapterConfig,
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupConfig,
    get_logger,
)
from markup_core.tree import Element, Node, Text, iter_nodes, make_element


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()     # ElementTree-style APIs (xml.etree, lxml)
    HTML_LIBRARY = auto()    # HTML document models (BeautifulSoup)
    PLUGIN = auto()          # Custom adapters registered by applications


class ConversionDirection(Enum):
    """Direction of data conversion."""

    TO_TARGET = auto()      # Markup tree to target format
    FROM_TARGET = auto()    # Target format to markup tree


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    adapter_type: AdapterType
    target_library: str
    description: str
    supported_versions: List[str] = field(default_factory=list)


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class AdapterPerformanceProfiler:
    """Keeps recent conversion timings per adapter."""

    max_samples = 1000

    def __init__(self) -> None:
        self._metrics: Dict[str, List[float]] = {}
        self._lock = threading.RLock()

    def record_conversion(self, adapter_name: str, conversion_time_ms: float) -> None:
        """Record conversion performance."""
        with self._lock:
            samples = self._metrics.setdefault(adapter_name, [])
            samples.append(conversion_time_ms)
            if len(samples) > self.max_samples:
                del samples[:-self.max_samples]

    def get_statistics(self, adapter_name: str) -> Dict[str, float]:
        """Get performance statistics for an adapter."""
        with self._lock:
            times = self._metrics.get(adapter_name)
            if not times:
                return {}
            return {
                "count": len(times),
                "average_ms": sum(times) / len(times),
                "min_ms": min(times),
                "max_ms": max(times),
                "total_ms": sum(times),
            }

    def get_all_statistics(self) -> Dict[str, Dict[str, float]]:
        """Get performance statistics for all adapters."""
        with self._lock:
            return {name: self.get_statistics(name) for name in self._metrics}


def count_elements(node: Node) -> int:
    """Number of element nodes in a markup tree."""
    return sum(1 for item in iter_nodes(node) if isinstance(item, Element))


def merge_adjacent_text(children: List[Node]) -> List[Node]:
    """Join consecutive text nodes into one."""
    merged: List[Node] = []
    for child in children:
        if merged and isinstance(child, Text) and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].content + child.content)
        else:
            merged.append(child)
    return merged


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters.

    Subclasses implement the library-specific conversions; the base class
    supplies logging, timing, validation and error result construction.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        config: Optional[AdapterConfig] = None,
    ) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
            config: Adapter behaviour settings
        """
        self.correlation_id = correlation_id
        self.config = config or AdapterConfig()
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)
        self._profiler = AdapterPerformanceProfiler()

    @classmethod
    def from_config(
        cls, config: MarkupConfig, correlation_id: Optional[str] = None
    ) -> "IntegrationAdapter":
        """Build an adapter from the adapters section of ``config``.

        Also applies the configured package logging level.
        """
        config.apply_logging()
        if not config.global_.enable_correlation_tracking:
            correlation_id = None
        return cls(correlation_id, config.adapters)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def to_target(self, node: Node) -> ConversionResult:
        """Convert a markup tree to the target format."""

    @abstractmethod
    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert target format data to a markup tree."""

    def validate_conversion(
        self,
        original: Any,
        converted: Any,
        direction: ConversionDirection
    ) -> bool:
        """Check that a conversion kept the tree's shape.

        Returns:
            True if conversion maintains data integrity, False otherwise
        """
        if converted is None:
            return original is None
        try:
            return self._perform_validation(original, converted, direction)
        except Exception as e:
            self._logger.warning(
                f"Validation failed with error: {e}",
                extra={"direction": direction.name}
            )
            return False

    def _perform_validation(
        self,
        original: Any,
        converted: Any,
        direction: ConversionDirection
    ) -> bool:
        """Adapter-specific validation; the default only checks for a result."""
        return converted is not None

    def get_performance_stats(self) -> Dict[str, Dict[str, float]]:
        """Get performance statistics for this adapter."""
        return self._profiler.get_all_statistics()

    def _record_performance(self, operation_time_ms: float) -> None:
        if self.config.record_performance:
            self._profiler.record_conversion(self.metadata.name, operation_time_ms)

    def _create_success_result(
        self,
        converted_data: Any,
        original_data: Any,
        start_time: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ConversionResult:
        processing_time = (time.time() - start_time) * 1000
        self._record_performance(processing_time)
        self._logger.debug(
            f"Converted with {self.metadata.name} adapter",
            extra={"conversion_time_ms": processing_time},
        )
        return ConversionResult(
            success=True,
            converted_data=converted_data,
            original_data=original_data,
            conversion_time_ms=processing_time,
            metadata=metadata or {},
        )

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id
                )
            ]
        )


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._instances: "weakref.WeakValueDictionary[str, IntegrationAdapter]" = (
            weakref.WeakValueDictionary()
        )
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            metadata = adapter_class().metadata
            self._adapters[metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None,
        config: Optional[AdapterConfig] = None,
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name.

        Instances are cached per correlation ID and adapter configuration.

        Returns:
            Adapter instance if registered and available, None otherwise
        """
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
            if adapter_class is None:
                return None

            config = config or AdapterConfig()
            instance_key = (
                f"{adapter_name}_{correlation_id or 'default'}_{astuple(config)}"
            )
            instance = self._instances.get(instance_key)
            if instance is not None:
                return instance

            instance = adapter_class(correlation_id, config)
            if not instance.is_available():
                return None
            self._instances[instance_key] = instance
            return instance

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata for every registered adapter whose library imports."""
        with self._lock:
            instances = [adapter_class() for adapter_class in self._adapters.values()]
        return [instance.metadata for instance in instances if instance.is_available()]

    def get_adapters_by_type(self, adapter_type: AdapterType) -> List[str]:
        """Get available adapter names of the given type."""
        return [
            metadata.name
            for metadata in self.list_available_adapters()
            if metadata.adapter_type == adapter_type
        ]


_adapter_registry = AdapterRegistry()


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None,
    config: Optional[AdapterConfig] = None,
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance, or None if unknown or unavailable."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id, config)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()


def get_adapters_by_type(adapter_type: AdapterType) -> List[str]:
    """Get adapter names by type."""
    return _adapter_registry.get_adapters_by_type(adapter_type)


class _EtreeAdapter(IntegrationAdapter):
    """Shared conversion logic for ElementTree-compatible APIs."""

    @abstractmethod
    def _etree_module(self) -> Any:
        """Return the ElementTree-compatible module to build elements with."""

    def _element_to_etree(self, element: Element, element_factory: Callable) -> Any:
        target = element_factory(element.tag)
        for name, value in sorted(element.attributes.items()):
            target.set(name, value)

        last_child = None
        for child in element.children:
            if isinstance(child, Text):
                if last_child is None:
                    target.text = (target.text or "") + child.content
                else:
                    last_child.tail = (last_child.tail or "") + child.content
            else:
                last_child = self._element_to_etree(child, element_factory)
                target.append(last_child)
        return target

    def _etree_to_element(self, source: Any) -> Element:
        children: List[Node] = []
        if source.text:
            children.append(Text(source.text))
        for child in source:
            # Comments and processing instructions have non-string tags
            if isinstance(child.tag, str):
                children.append(self._etree_to_element(child))
            if child.tail:
                children.append(Text(child.tail))
        if self.config.merge_adjacent_text:
            children = merge_adjacent_text(children)
        return make_element(source.tag, dict(source.attrib), children)

    def _perform_validation(
        self,
        original: Any,
        converted: Any,
        direction: ConversionDirection
    ) -> bool:
        if direction == ConversionDirection.TO_TARGET:
            tree, target = original, converted
        else:
            tree, target = converted, original
        target_count = sum(1 for item in target.iter() if isinstance(item.tag, str))
        return count_elements(tree) == target_count

    def to_target(self, node: Node) -> ConversionResult:
        start_time = time.time()
        if not isinstance(node, Element):
            return self._create_error_result(
                "Only element nodes can become a tree root", node
            )
        try:
            module = self._etree_module()
            converted = self._element_to_etree(node, module.Element)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                node,
                (time.time() - start_time) * 1000,
            )
        return self._create_success_result(
            converted, node, start_time, {"element_count": count_elements(node)}
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        start_time = time.time()
        if hasattr(target_data, "getroot"):
            target_data = target_data.getroot()
        if not hasattr(target_data, "tag") or not isinstance(target_data.tag, str):
            return self._create_error_result(
                f"Target data is not a valid {self.metadata.target_library} element",
                target_data,
            )
        try:
            converted = self._etree_to_element(target_data)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.target_library}: {e}",
                target_data,
                (time.time() - start_time) * 1000,
            )
        return self._create_success_result(
            converted,
            target_data,
            start_time,
            {"original_tag": target_data.tag, "element_count": count_elements(converted)},
        )


class ElementTreeAdapter(_EtreeAdapter):
    """Adapter for bidirectional conversion with xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Bidirectional conversion between markup trees and ElementTree",
        )

    def is_available(self) -> bool:
        return True

    def _etree_module(self) -> Any:
        import xml.etree.ElementTree as ET

        return ET


class LxmlAdapter(_EtreeAdapter):
    """Adapter for bidirectional conversion with lxml.etree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            supported_versions=["4.0+"],
            description="Bidirectional conversion between markup trees and lxml.etree",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
        except ImportError:
            return False
        return True

    def _etree_module(self) -> Any:
        import lxml.etree

        return lxml.etree


class BeautifulSoupAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with BeautifulSoup."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="beautifulsoup",
            version="1.0.0",
            adapter_type=AdapterType.HTML_LIBRARY,
            target_library="beautifulsoup4",
            supported_versions=["4.0+"],
            description="Bidirectional conversion between markup trees and BeautifulSoup",
        )

    def is_available(self) -> bool:
        try:
            import bs4  # noqa: F401
        except ImportError:
            return False
        return True

    def _node_to_soup(self, node: Node, soup: Any) -> Any:
        if isinstance(node, Text):
            return soup.new_string(node.content)
        tag = soup.new_tag(node.tag, attrs=dict(sorted(node.attributes.items())))
        for child in node.children:
            tag.append(self._node_to_soup(child, soup))
        return tag

    def _soup_to_element(self, tag: Any) -> Element:
        from bs4 import NavigableString, Tag
        from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

        skipped = (Comment, Declaration, Doctype, ProcessingInstruction)
        children: List[Node] = []
        for child in tag.children:
            if isinstance(child, Tag):
                children.append(self._soup_to_element(child))
            elif isinstance(child, NavigableString) and not isinstance(child, skipped):
                children.append(Text(str(child)))
        if self.config.merge_adjacent_text:
            children = merge_adjacent_text(children)

        # Multi-valued attributes such as class come back as lists
        attributes = {
            name: " ".join(value) if isinstance(value, list) else value
            for name, value in tag.attrs.items()
        }
        return make_element(tag.name, attributes, children)

    def to_target(self, node: Node) -> ConversionResult:
        start_time = time.time()
        try:
            from bs4 import BeautifulSoup

            soup = BeautifulSoup("", self.config.soup_features)
            soup.append(self._node_to_soup(node, soup))
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to BeautifulSoup: {e}",
                node,
                (time.time() - start_time) * 1000,
            )
        return self._create_success_result(
            soup,
            node,
            start_time,
            {"parser_name": self.config.soup_features, "element_count": count_elements(node)},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        start_time = time.time()
        try:
            from bs4 import BeautifulSoup, Tag

            root = target_data
            if isinstance(target_data, BeautifulSoup):
                root = next(
                    (child for child in target_data.children if isinstance(child, Tag)),
                    None,
                )
            if not isinstance(root, Tag):
                return self._create_error_result(
                    "Target data does not contain a BeautifulSoup tag", target_data
                )
            converted = self._soup_to_element(root)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert from BeautifulSoup: {e}",
                target_data,
                (time.time() - start_time) * 1000,
            )
        return self._create_success_result(
            converted,
            target_data,
            start_time,
            {"original_tag": root.name, "element_count": count_elements(converted)},
        )


for _builtin_adapter in (ElementTreeAdapter, LxmlAdapter, BeautifulSoupAdapter):
    register_adapter(_builtin_adapter)
