"""
JSON protocol generator.

Every operation is a POST to ``/`` naming the operation in the
``X-Amz-Target`` header. Records are serialized by the runtime from the wire
names declared on their fields, so no serializer functions are emitted.
"""

from typing import List

from ..core.generator import RECORD_DECORATOR, ProtocolGenerator, StructAttributes
from ..core.service import Service

JSON_IMPORTS = [("serialization", "_serde")]


def json_struct_attributes(serialized: bool, deserialized: bool) -> StructAttributes:
    """Decorators for records of the JSON-based protocols."""
    decorators: List[str] = []
    if serialized:
        decorators.append("_serde.serializable")
    if deserialized:
        decorators.append("_serde.deserializable")
    decorators.append(RECORD_DECORATOR)
    return StructAttributes(tuple(decorators), wire_fields=serialized or deserialized)


class JsonGenerator(ProtocolGenerator):
    """Generator for the ``json`` protocol."""

    @property
    def protocol_name(self) -> str:
        return "json"

    def generate_prelude(self, service: Service) -> str:
        return self.render_template("protocol_prelude.py.j2", {"imports": JSON_IMPORTS})

    def generate_methods(self, service: Service) -> str:
        methods = []
        target_prefix = service.metadata.target_prefix

        for context in self.operations_context(service):
            context["json_version"] = service.metadata.json_version
            context["target"] = (
                f"{target_prefix}.{context['name']}" if target_prefix else context["name"]
            )
            methods.append(self.render_template("json_method.py.j2", context))

        return "\n".join(methods)

    def generate_struct_attributes(
        self, struct_name: str, serialized: bool, deserialized: bool
    ) -> StructAttributes:
        return json_struct_attributes(serialized, deserialized)

    def timestamp_type(self) -> str:
        # Epoch seconds
        return "float"
