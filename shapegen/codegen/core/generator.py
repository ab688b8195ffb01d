"""
Base protocol generator interface.

Defines the contract each wire protocol implements so the compiler and the
orchestrator can emit a client without knowing the protocol.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import GeneratorConfig
from .naming import escape_doc, method_name, mutate_type_name
from .service import Operation, Service, Shape
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class UnsupportedProtocolError(GeneratorError):
    """The service uses a protocol no generator exists for."""

    pass


class UnsupportedShapeError(GeneratorError):
    """A shape has a kind the generator cannot translate."""

    pass


@dataclass(frozen=True)
class StructAttributes:
    """Decorators for a generated record.

    Attributes:
        decorators: Decorator expressions, outermost first, without ``@``.
        wire_fields: Fields must be declared with wire names and encoding
            hints because the decorators serialize them automatically.
    """

    decorators: Tuple[str, ...]
    wire_fields: bool = False

    def render(self) -> str:
        return "\n".join(f"@{decorator}" for decorator in self.decorators)


RECORD_DECORATOR = "_dataclasses.dataclass(kw_only=True)"


class ProtocolGenerator(ABC):
    """Abstract base class for all protocol generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def protocol_name(self) -> str:
        """Return the protocol implemented (e.g., 'json', 'rest-xml')."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine()
        return self._template_engine

    @abstractmethod
    def generate_prelude(self, service: Service) -> str:
        """Imports the generated module needs beyond the common prelude."""
        pass

    @abstractmethod
    def generate_methods(self, service: Service) -> str:
        """
        Generate one client method per operation.

        The result is placed inside the body of the client class.
        """
        pass

    @abstractmethod
    def generate_struct_attributes(
        self, struct_name: str, serialized: bool, deserialized: bool
    ) -> StructAttributes:
        """Decorators for the record generated for `struct_name`."""
        pass

    def generate_serializer(
        self, name: str, shape: Shape, service: Service
    ) -> Optional[str]:
        """Custom serializer for a type, if the protocol needs one."""
        return None

    def generate_deserializer(
        self, name: str, shape: Shape, service: Service
    ) -> Optional[str]:
        """Custom deserializer for a type, if the protocol needs one."""
        return None

    @abstractmethod
    def timestamp_type(self) -> str:
        """Python type used for timestamp shapes."""
        pass

    def format_code(self, code: str) -> str:
        """
        Tidy generated code.

        Strips trailing whitespace and collapses runs of blank lines to two.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).rstrip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with the runtime package and config available."""
        full_context = {
            "runtime": self.config.runtime_package,
            "config": self.config,
            **context,
        }
        return self.template_engine.render_template(template_name, full_context)

    def operation_context(self, service: Service, operation: Operation) -> Dict[str, Any]:
        """Template variables shared by every protocol's method templates."""
        return {
            "operation": operation,
            "name": operation.name,
            "method_name": method_name(operation.name),
            "input_type": mutate_type_name(operation.input) if operation.input else None,
            "output_type": (
                mutate_type_name(operation.output) if operation.output else None
            ),
            "documentation": (
                escape_doc(operation.documentation)
                if operation.documentation and self.config.add_comments
                else None
            ),
            "error_type": service.error_type_name(),
            "signing_name": service.signing_name(),
            "endpoint_prefix": service.endpoint_prefix(),
        }

    def operations_context(self, service: Service) -> List[Dict[str, Any]]:
        return [
            self.operation_context(service, operation)
            for operation in service.operations.values()
        ]


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
