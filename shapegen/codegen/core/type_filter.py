"""
Reachability analysis over the shape graph.

Determines which shapes are sent to the service (reachable from an
operation's input) and which are read back (reachable from an output).
"""

from typing import Set, Tuple

from ...logging_config import get_logger
from .service import Service, ShapeType

logger = get_logger(__name__)


def filter_types(service: Service) -> Tuple[Set[str], Set[str]]:
    """
    Compute the shapes needing serialization and deserialization support.

    Args:
        service: Service description

    Returns:
        Tuple of (serialized shape names, deserialized shape names). A shape
        may appear in both.
    """
    serialized: Set[str] = set()
    deserialized: Set[str] = set()

    for operation in service.operations.values():
        if operation.input:
            _collect_shapes(service, operation.input, serialized)
        if operation.output:
            _collect_shapes(service, operation.output, deserialized)

    logger.debug(
        "Reachability: %d serialized, %d deserialized shapes",
        len(serialized),
        len(deserialized),
    )
    return serialized, deserialized


def _collect_shapes(service: Service, shape_name: str, found: Set[str]) -> None:
    """Add `shape_name` and every shape it references to `found`."""
    pending = [shape_name]

    while pending:
        name = pending.pop()
        if name in found:
            continue
        found.add(name)

        shape = service.get_shape(name)
        kind = shape.shape_type

        if kind == ShapeType.STRUCTURE:
            pending.extend(member.shape for member in shape.members.values())
        elif kind == ShapeType.LIST:
            pending.append(shape.member_type())
        elif kind == ShapeType.MAP:
            pending.append(shape.key_type())
            pending.append(shape.value_type())
