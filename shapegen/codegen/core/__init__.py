"""
Core code generation components.

Provides the service model, the declaration compiler and the base classes
used by all protocol generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .error_types import ErrorTypeGenerator, JsonErrorTypes, XmlErrorTypes
from .generator import (
    GenerationResult,
    GeneratorError,
    ProtocolGenerator,
    StructAttributes,
    UnsupportedProtocolError,
    UnsupportedShapeError,
)
from .naming import (
    capitalize_first,
    error_type_name,
    generate_field_name,
    mutate_type_name,
)
from .service import MemberRef, Operation, Service, ServiceMetadata, Shape, ShapeType
from .templates import TemplateEngine, TemplateError, create_template_engine
from .type_filter import filter_types
from .types import TypeCompiler

__all__ = [
    # Base generator interface
    "ProtocolGenerator",
    "StructAttributes",
    "GeneratorError",
    "UnsupportedProtocolError",
    "UnsupportedShapeError",
    "GenerationResult",
    # Service model
    "Service",
    "ServiceMetadata",
    "Shape",
    "ShapeType",
    "MemberRef",
    "Operation",
    # Compilation
    "TypeCompiler",
    "filter_types",
    "ErrorTypeGenerator",
    "JsonErrorTypes",
    "XmlErrorTypes",
    # Naming
    "capitalize_first",
    "error_type_name",
    "generate_field_name",
    "mutate_type_name",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
