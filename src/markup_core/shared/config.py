"""Configuration classes for markup_core.

Component configurations are plain dataclasses that validate themselves in
``__post_init__``. :class:`MarkupConfig` bundles them into one immutable
object that can be overridden, serialized to JSON, and rebuilt from it.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .logging import configure_logging

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_SOUP_FEATURES = ["html.parser", "lxml", "xml", "lxml-xml", "html5lib"]

_COMPONENT_FIELDS = ["serializer", "adapters", "global_"]


@dataclass
class SerializerConfig:
    """Configuration for the indented tree serializer."""

    indent_width: int = 2
    line_separator: str = "\n"

    def __post_init__(self) -> None:
        """Validate serializer configuration."""
        if self.indent_width < 0:
            raise ValueError("indent_width must be >= 0")
        if not self.line_separator:
            raise ValueError("line_separator cannot be empty")


@dataclass
class AdapterConfig:
    """Configuration for integration adapters."""

    record_performance: bool = True
    merge_adjacent_text: bool = True
    soup_features: str = "html.parser"

    def __post_init__(self) -> None:
        """Validate adapter configuration."""
        if self.soup_features not in VALID_SOUP_FEATURES:
            raise ValueError(f"soup_features must be one of {VALID_SOUP_FEATURES}")


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "INFO"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class MarkupConfig:
    """Immutable configuration for all markup_core components.

    Thread-safe due to frozen dataclass implementation.
    """

    serializer: SerializerConfig = field(default_factory=SerializerConfig)
    adapters: AdapterConfig = field(default_factory=AdapterConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.serializer.__post_init__()
            self.adapters.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "MarkupConfig":
        """Create a new configuration with specific overrides.

        Nested fields use double-underscore notation.

        Example:
            >>> config = MarkupConfig()
            >>> compact = config.override(serializer__indent_width=0)
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            # "global_" ends in an underscore, so match on known prefixes
            component = next(
                (name for name in _COMPONENT_FIELDS if key.startswith(name + "__")),
                None,
            )
            if component is not None:
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            elif "__" in key:
                raise ConfigValidationError(
                    f"Unknown configuration component in {key}",
                    field_name=key,
                    suggestions=list(_COMPONENT_FIELDS),
                )
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        try:
            for component, values in nested_overrides.items():
                new_fields[component] = replace(getattr(self, component), **values)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def apply_logging(self) -> None:
        """Set the package logger to the configured ``global_.logging_level``."""
        configure_logging(self.global_.logging_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarkupConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored; missing keys take their defaults.
        """
        components = {
            "serializer": SerializerConfig,
            "adapters": AdapterConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key in components:
                    target = components[key]
                    known = {
                        name: item for name, item in value.items()
                        if name in target.__dataclass_fields__
                    }
                    field_values[key] = target(**known)
                elif key in cls.__dataclass_fields__:
                    field_values[key] = value
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "MarkupConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def default(cls) -> "MarkupConfig":
        """Default configuration: two-space indentation, INFO logging."""
        return cls(name="default")

    @classmethod
    def compact(cls) -> "MarkupConfig":
        """Preset that renders every node flush left."""
        return cls(
            serializer=SerializerConfig(indent_width=0),
            name="compact",
            description="Serializer output without indentation",
        )

    @classmethod
    def verbose(cls) -> "MarkupConfig":
        """Preset with debug logging enabled."""
        return cls(
            global_=GlobalConfig(logging_level="DEBUG"),
            name="verbose",
            description="Debug logging for serializer and adapters",
        )
