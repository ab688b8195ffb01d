"""
Protocol registry.

Maps the ``metadata.protocol`` value of a service description to the pair of
generators used for it: a protocol generator and an error-type generator.
Protocol values are matched exactly; ``"JSON"`` is not ``"json"``.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type

from ..logging_config import get_logger
from .core.config import GeneratorConfig
from .core.error_types import ErrorTypeGenerator, JsonErrorTypes, XmlErrorTypes
from .core.generator import ProtocolGenerator, UnsupportedProtocolError
from .protocols.json_generator import JsonGenerator
from .protocols.query_generator import QueryGenerator
from .protocols.rest_json_generator import RestJsonGenerator
from .protocols.rest_xml_generator import RestXmlGenerator

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass(frozen=True)
class ProtocolPair:
    """Generator classes used together for one protocol."""

    protocol: Type[ProtocolGenerator]
    error_types: Type[ErrorTypeGenerator]

    def create(
        self, config: Optional[GeneratorConfig] = None
    ) -> Tuple[ProtocolGenerator, ErrorTypeGenerator]:
        protocol_generator = self.protocol(config)
        error_types = self.error_types(
            protocol_generator.config, protocol_generator.template_engine
        )
        return protocol_generator, error_types


class ProtocolRegistry:
    """Registry of protocol generator pairs."""

    def __init__(self):
        """Initialize empty registry."""
        self._pairs: Dict[str, ProtocolPair] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        protocol: str,
        generator_class: Type[ProtocolGenerator],
        error_types_class: Type[ErrorTypeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register the generators for a protocol.

        Args:
            protocol: Protocol value exactly as found in service metadata (e.g. 'json')
            generator_class: Class implementing ProtocolGenerator
            error_types_class: Class implementing ErrorTypeGenerator
            aliases: Other protocol values served by the same pair
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If a class is invalid or an alias conflicts
        """
        if not issubclass(generator_class, ProtocolGenerator):
            raise RegistryError("Generator class must inherit from ProtocolGenerator")
        if not issubclass(error_types_class, ErrorTypeGenerator):
            raise RegistryError(
                "Error type class must inherit from ErrorTypeGenerator"
            )

        if protocol in self._pairs and not replace:
            return

        self._pairs[protocol] = ProtocolPair(generator_class, error_types_class)

        for alias in aliases or []:
            if alias == protocol:
                continue
            if not replace:
                if alias in self._pairs:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing protocol"
                    )
                if alias in self._aliases and self._aliases[alias] != protocol:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias]}'"
                    )
            self._aliases[alias] = protocol

    def unregister(self, protocol: str):
        """Remove a protocol and its aliases."""
        self._pairs.pop(protocol, None)
        for alias in self.get_aliases(protocol):
            del self._aliases[alias]

    def get_pair(self, protocol: str) -> ProtocolPair:
        """
        Get the generator pair for a protocol value.

        Raises:
            UnsupportedProtocolError: If no pair serves the protocol
        """
        key = self._aliases.get(protocol, protocol)

        if key in self._pairs:
            return self._pairs[key]

        raise UnsupportedProtocolError(
            f"Unknown protocol {protocol}. "
            f"Available: {', '.join(self.list_all_names())}"
        )

    def list_protocols(self) -> List[str]:
        """Registered primary protocol names."""
        return sorted(self._pairs)

    def get_aliases(self, protocol: str) -> List[str]:
        return sorted(alias for alias, target in self._aliases.items() if target == protocol)

    def list_all_names(self) -> List[str]:
        """Every accepted protocol value, aliases included."""
        return sorted(set(self._pairs) | set(self._aliases))

    def is_supported(self, protocol: str) -> bool:
        return protocol in self._pairs or protocol in self._aliases


def create_registry() -> ProtocolRegistry:
    """Build a registry holding the built-in protocols.

    Each call returns a new registry, so changes to one never leak into
    another generation run.
    """
    registry = ProtocolRegistry()
    _register_protocols(registry)
    return registry


def _register_protocols(registry: ProtocolRegistry):
    """
    Register the built-in protocols.

    EC2 is served by the query pair; its wire differences are handled inside
    QueryGenerator.
    """
    registry.register("json", JsonGenerator, JsonErrorTypes)
    registry.register("query", QueryGenerator, XmlErrorTypes, aliases=["ec2"])
    registry.register("rest-json", RestJsonGenerator, JsonErrorTypes)
    registry.register("rest-xml", RestXmlGenerator, XmlErrorTypes)


def get_protocol_pair(protocol: str) -> ProtocolPair:
    """Generator pair for a protocol value among the built-in protocols."""
    pair = create_registry().get_pair(protocol)
    logger.debug(
        "Protocol %s uses %s / %s",
        protocol,
        pair.protocol.__name__,
        pair.error_types.__name__,
    )
    return pair


def list_protocols() -> List[str]:
    """List all accepted protocol values."""
    return create_registry().list_all_names()


def is_protocol_supported(protocol: str) -> bool:
    return create_registry().is_supported(protocol)
