"""
Error class generation.

Every generated client gets one base error class, one subclass per exception
shape and three fallbacks for failures that carry no service error code. The
two variants differ only in how an error response body is parsed.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .config import GeneratorConfig
from .naming import error_type_name, escape_doc
from .service import Service
from .templates import TemplateEngine, create_template_engine

FALLBACK_SUFFIXES = ("HttpDispatchError", "CredentialsError", "UnknownError")


class ErrorTypeGenerator(ABC):
    """Emits the error classes of a generated client."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.config = config or GeneratorConfig()
        self.template_engine = template_engine or create_template_engine()

    @property
    @abstractmethod
    def parse_function(self) -> str:
        """Runtime function returning ``(code, message)`` for an error response."""
        pass

    def generate_error_types(self, service: Service) -> str:
        client = service.client_type_name()
        return self.template_engine.render_template(
            "errors.py.j2",
            {
                "base": service.error_type_name(),
                "service_name": service.service_name(),
                "parse_function": self.parse_function,
                "errors": self.error_variants(service),
                "dispatch": f"{client}HttpDispatchError",
                "credentials": f"{client}CredentialsError",
                "unknown": f"{client}UnknownError",
            },
        )

    def error_variants(self, service: Service) -> List[Dict[str, Any]]:
        """One entry per exception shape, in declaration order."""
        variants = []
        for shape in service.exception_shapes():
            documentation = None
            if shape.documentation and self.config.add_comments:
                documentation = escape_doc(shape.documentation)
            variants.append(
                {
                    "name": error_type_name(shape.name),
                    "code": shape.wire_code,
                    "documentation": documentation,
                }
            )
        return variants

    @staticmethod
    def fallback_names(service: Service) -> List[str]:
        client = service.client_type_name()
        return [f"{client}{suffix}" for suffix in FALLBACK_SUFFIXES]


class JsonErrorTypes(ErrorTypeGenerator):
    """Errors for the json and rest-json protocols."""

    @property
    def parse_function(self) -> str:
        return "_errors.parse_json_error"


class XmlErrorTypes(ErrorTypeGenerator):
    """Errors for the query, ec2 and rest-xml protocols."""

    @property
    def parse_function(self) -> str:
        return "_errors.parse_xml_error"
