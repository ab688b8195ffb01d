"""
shapegen code generation module.

Compiles a botocore service description into a Python client module.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.generator import (
    GenerationResult,
    GeneratorError,
    ProtocolGenerator,
    UnsupportedProtocolError,
    UnsupportedShapeError,
)
from .core.service import Service
from .registry import (
    ProtocolRegistry,
    RegistryError,
    get_protocol_pair,
    is_protocol_supported,
    list_protocols,
)
from .source import generate, generate_code, generate_source, render_source


def generate_from_dict(data, config=None):
    """
    Generate a client module from a parsed service description.

    Args:
        data: Service description as loaded from JSON
        config: Generator configuration

    Returns:
        GenerationResult with generated code
    """
    return generate_code(Service.from_dict(data), config)


__all__ = [
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
    "GenerationResult",
    "GeneratorError",
    "ProtocolGenerator",
    "UnsupportedProtocolError",
    "UnsupportedShapeError",
    "Service",
    "ProtocolRegistry",
    "RegistryError",
    "get_protocol_pair",
    "is_protocol_supported",
    "list_protocols",
    "generate",
    "generate_code",
    "generate_source",
    "render_source",
    "generate_from_dict",
]
