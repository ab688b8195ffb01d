"""
Shape-to-declaration compiler.

Turns every non-exception shape of a service into a Python declaration:
records become keyword-only dataclasses, lists and maps become typing aliases
and primitives become aliases of builtin types. The protocol generator decides
how records are decorated and may add serializer/deserializer functions.
"""

from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, List, Optional, TextIO

from ...logging_config import get_logger
from .config import GeneratorConfig
from .generator import ProtocolGenerator, UnsupportedShapeError
from .naming import escape_doc, generate_field_name, mutate_type_name
from .service import MemberRef, Service, Shape, ShapeType
from .type_filter import filter_types

logger = get_logger(__name__)

# Python has a single float and a single int type; the width is kept as a
# trailing comment on the alias.
PRIMITIVE_TYPES = {
    ShapeType.BLOB: ("bytes", None),
    ShapeType.BOOLEAN: ("bool", None),
    ShapeType.DOUBLE: ("float", "64-bit"),
    ShapeType.FLOAT: ("float", "32-bit"),
    ShapeType.INTEGER: ("int", "32-bit"),
    ShapeType.LONG: ("int", "64-bit"),
    ShapeType.STRING: ("str", None),
}


@dataclass(frozen=True)
class TypeSummary:
    """What the declarations section contains."""

    declaration_count: int
    serialized: AbstractSet[str]
    deserialized: AbstractSet[str]


class TypeCompiler:
    """Emits the type declarations section of a generated module."""

    def __init__(
        self,
        service: Service,
        protocol_generator: ProtocolGenerator,
        config: Optional[GeneratorConfig] = None,
    ):
        self.service = service
        self.protocol_generator = protocol_generator
        self.config = config or protocol_generator.config

    def generate_types(self, writer: TextIO) -> TypeSummary:
        """
        Write one declaration per non-exception shape, in declaration order.

        Args:
            writer: Destination for the generated text

        Returns:
            Declaration count and the serialized/deserialized shape names
        """
        serialized_types, deserialized_types = filter_types(self.service)
        count = 0

        for name, shape in self.service.shapes.items():
            # Exception shapes become error classes instead
            if shape.exception:
                continue

            type_name = mutate_type_name(name)
            serialized = name in serialized_types
            deserialized = name in deserialized_types

            writer.write(
                self.generate_declaration(type_name, shape, serialized, deserialized)
            )
            writer.write("\n\n")
            count += 1

            if deserialized:
                deserializer = self.protocol_generator.generate_deserializer(
                    type_name, shape, self.service
                )
                if deserializer:
                    writer.write(deserializer)
                    writer.write("\n\n")

            if serialized:
                serializer = self.protocol_generator.generate_serializer(
                    type_name, shape, self.service
                )
                if serializer:
                    writer.write(serializer)
                    writer.write("\n\n")

        logger.debug("Generated %d type declarations", count)
        return TypeSummary(count, serialized_types, deserialized_types)

    def generate_declaration(
        self, type_name: str, shape: Shape, serialized: bool, deserialized: bool
    ) -> str:
        """Source text declaring `type_name` for `shape`."""
        kind = shape.shape_type

        if kind == ShapeType.STRUCTURE:
            return self.generate_struct(type_name, shape, serialized, deserialized)
        elif kind == ShapeType.LIST:
            return self._render_alias(
                type_name,
                f'_t.List["{mutate_type_name(shape.member_type())}"]',
                shape,
            )
        elif kind == ShapeType.MAP:
            return self._render_alias(
                type_name,
                f'_t.Dict["{mutate_type_name(shape.key_type())}", '
                f'"{mutate_type_name(shape.value_type())}"]',
                shape,
            )
        else:
            return self.generate_primitive_type(type_name, shape)

    def generate_primitive_type(self, type_name: str, shape: Shape) -> str:
        kind = shape.shape_type

        if kind == ShapeType.TIMESTAMP:
            python_type, width = self.protocol_generator.timestamp_type(), None
        elif kind in PRIMITIVE_TYPES:
            python_type, width = PRIMITIVE_TYPES[kind]
        else:
            raise UnsupportedShapeError(
                f"Unknown primitive type '{shape.type_name}' for shape {shape.name}"
            )

        return self._render_alias(type_name, python_type, shape, width)

    def generate_struct(
        self, type_name: str, shape: Shape, serialized: bool, deserialized: bool
    ) -> str:
        attributes = self.protocol_generator.generate_struct_attributes(
            type_name, serialized, deserialized
        )
        fields = self.generate_struct_fields(shape, attributes.wire_fields)

        return self.protocol_generator.template_engine.render_template(
            "struct.py.j2",
            {
                "name": type_name,
                "attributes": attributes.render(),
                "documentation": self._doc(shape.documentation),
                "fields": fields,
            },
        )

    def generate_struct_fields(
        self, shape: Shape, wire_fields: bool
    ) -> List[Dict[str, Any]]:
        """Field descriptions for the struct template; deprecated members are dropped."""
        fields = []

        for member_name, member in shape.members.items():
            if member.deprecated:
                continue

            type_name = mutate_type_name(member.shape)
            required = shape.is_required(member_name)

            fields.append(
                {
                    "name": generate_field_name(member_name),
                    "annotation": type_name if required else f"_t.Optional[{type_name}]",
                    "default": self._field_default(
                        shape, member_name, member, required, wire_fields
                    ),
                    "documentation": self._doc(member.documentation),
                }
            )

        return fields

    def _field_default(
        self,
        shape: Shape,
        member_name: str,
        member: MemberRef,
        required: bool,
        wire_fields: bool,
    ) -> Optional[str]:
        if not wire_fields:
            return None if required else "None"

        wire_name = member_name
        if member.location is None and member.location_name:
            wire_name = member.location_name

        args = [f'"{wire_name}"']
        if not required:
            args.append("default=None")

        kind = self.service.shape_type_for_member(member)
        if kind == ShapeType.BLOB:
            args.append("blob=True")
        elif kind == ShapeType.BOOLEAN and not required:
            args.append("skip_none=True")

        return f"_serde.wire({', '.join(args)})"

    def _render_alias(
        self,
        type_name: str,
        target: str,
        shape: Shape,
        comment: Optional[str] = None,
    ) -> str:
        return self.protocol_generator.template_engine.render_template(
            "alias.py.j2",
            {
                "name": type_name,
                "target": target,
                "comment": comment,
                "documentation": self._doc(shape.documentation),
            },
        )

    def _doc(self, text: Optional[str]) -> Optional[str]:
        if not text or not self.config.add_comments:
            return None
        return escape_doc(text)
