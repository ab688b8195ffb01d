"""
Client module generation.

Selects the generators for a service's protocol and writes the generated
module section by section: prelude, type declarations, error classes, the
client class and its tests.
"""

import io
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from ..logging_config import get_logger
from .core.config import ConfigManager, GeneratorConfig
from .core.error_types import ErrorTypeGenerator
from .core.generator import GenerationResult, ProtocolGenerator
from .core.naming import method_name
from .core.service import Service
from .core.types import TypeCompiler
from .registry import get_protocol_pair

logger = get_logger(__name__)

SECTION_BREAK = "\n\n"


def generate_source(
    service: Service,
    output_path: Union[str, Path],
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """
    Generate the client module for `service` and write it to `output_path`.

    The destination is opened before anything is generated: an OSError from
    opening it propagates to the caller. Generation errors propagate too and
    leave an incomplete file that must not be used.

    Args:
        service: Service description
        output_path: Destination file, created or overwritten
        config: Generator configuration

    Returns:
        GenerationResult with the written code and metadata
    """
    with open(output_path, "w", encoding="utf-8") as writer:
        result = generate_code(service, config)
        writer.write(result.code)

    logger.info("Wrote %s client to %s", service.client_type_name(), output_path)
    return result


def render_source(service: Service, config: Optional[GeneratorConfig] = None) -> str:
    """Generate the client module for `service` and return its source."""
    return generate_code(service, config).code


def generate_code(
    service: Service, config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """
    Generate the client module in memory.

    Raises:
        UnsupportedProtocolError: The service protocol has no generators
        UnsupportedShapeError: A shape has a kind that cannot be translated
    """
    config = config or GeneratorConfig()
    protocol = service.metadata.protocol
    logger.debug("Generating %s client for protocol %s", service.service_name(), protocol)

    protocol_generator, error_type_generator = get_protocol_pair(protocol).create(config)

    buffer = io.StringIO()
    metadata = generate(buffer, service, protocol_generator, error_type_generator, config)
    code = protocol_generator.format_code(buffer.getvalue())

    warnings = ConfigManager().validate_config(config)
    return GenerationResult(code, warnings, metadata)


def generate(
    writer: TextIO,
    service: Service,
    protocol_generator: ProtocolGenerator,
    error_type_generator: ErrorTypeGenerator,
    config: Optional[GeneratorConfig] = None,
) -> Dict[str, Any]:
    """
    Write every section of the client module to `writer`.

    Returns:
        Metadata about what was generated
    """
    config = config or protocol_generator.config

    writer.write(
        protocol_generator.render_template(
            "prelude.py.j2",
            {
                "service_full_name": service.metadata.service_full_name,
                "protocol": service.metadata.protocol,
            },
        )
    )
    writer.write(protocol_generator.generate_prelude(service))
    writer.write(SECTION_BREAK)

    summary = TypeCompiler(service, protocol_generator, config).generate_types(writer)

    writer.write(error_type_generator.generate_error_types(service))
    writer.write(SECTION_BREAK)

    writer.write(generate_client(service, protocol_generator))

    if config.generate_tests:
        writer.write(SECTION_BREAK)
        writer.write(generate_tests(service, protocol_generator))

    return {
        "protocol": protocol_generator.protocol_name,
        "service": service.service_name(),
        "client": service.client_type_name(),
        "shape_count": len(service.shapes),
        "declaration_count": summary.declaration_count,
        "operation_count": len(service.operations),
        "error_count": len(service.exception_shapes()),
        "serialized_count": len(summary.serialized),
        "deserialized_count": len(summary.deserialized),
    }


def generate_client(service: Service, protocol_generator: ProtocolGenerator) -> str:
    return protocol_generator.render_template(
        "client.py.j2",
        {
            "client": service.client_type_name(),
            "service_name": service.service_name(),
            "methods": protocol_generator.generate_methods(service),
        },
    )


def generate_tests(service: Service, protocol_generator: ProtocolGenerator) -> str:
    """Test functions exercising the generated client without network access."""
    operations = list(service.operations.values())
    return protocol_generator.render_template(
        "tests.py.j2",
        {
            "client": service.client_type_name(),
            "methods": [method_name(operation.name) for operation in operations],
            "no_input_methods": [
                method_name(operation.name)
                for operation in operations
                if not operation.input
            ],
        },
    )
