"""
Query protocol generator, also used for EC2.

Requests are form-encoded parameter lists built by generated
``serialize_<type>(params, name, obj)`` functions; responses are XML read by
generated ``deserialize_<type>(node)`` functions. EC2 differs only in how
list parameters are numbered, how members are named and in not wrapping the
result in an ``<OperationResult>`` element.
"""

from typing import Any, Dict, Optional

from ...logging_config import get_logger
from ..core.generator import RECORD_DECORATOR, ProtocolGenerator, StructAttributes
from ..core.naming import (
    deserializer_name,
    generate_field_name,
    mutate_type_name,
    serializer_name,
)
from ..core.service import MemberRef, Service, Shape, ShapeType
from .xml_payload import (
    COMPLEX_TYPES,
    XmlDeserializerGenerator,
    ec2_query_name,
    is_complex,
)

logger = get_logger(__name__)

QUERY_IMPORTS = [("params", "_params"), ("xml_payload", "_xml")]


class QueryGenerator(ProtocolGenerator):
    """Generator for the ``query`` and ``ec2`` protocols."""

    @property
    def protocol_name(self) -> str:
        return "query"

    def generate_prelude(self, service: Service) -> str:
        return self.render_template(
            "protocol_prelude.py.j2", {"imports": QUERY_IMPORTS}
        )

    def generate_methods(self, service: Service) -> str:
        ec2 = _is_ec2(service)
        methods = []
        logger.debug("Generating query methods (ec2=%s)", ec2)

        for context in self.operations_context(service):
            operation = context["operation"]
            context["api_version"] = service.metadata.api_version or ""
            if context["input_type"]:
                context["serializer"] = serializer_name(context["input_type"])
            if context["output_type"]:
                context["deserializer"] = deserializer_name(context["output_type"])

            wrapper = None if ec2 else operation.result_wrapper
            context["result_wrapper"] = f'"{wrapper}"' if wrapper else "None"

            methods.append(self.render_template("query_method.py.j2", context))

        return "\n".join(methods)

    def generate_struct_attributes(
        self, struct_name: str, serialized: bool, deserialized: bool
    ) -> StructAttributes:
        return StructAttributes((RECORD_DECORATOR,))

    def generate_serializer(
        self, name: str, shape: Shape, service: Service
    ) -> Optional[str]:
        kind = shape.shape_type
        if kind not in COMPLEX_TYPES:
            return None

        ec2 = _is_ec2(service)
        context: Dict[str, Any] = {
            "function": serializer_name(name),
            "type_name": name,
            "kind": kind.value,
        }

        if kind == ShapeType.STRUCTURE:
            fields = []
            for member_name, member in shape.members.items():
                if member.deprecated:
                    continue
                field_name = generate_field_name(member_name)
                key = _query_key(member_name, member, ec2)
                fields.append(
                    {
                        "name": field_name,
                        "statement": _put_statement(
                            service, member.shape, f'f"{{prefix}}{key}"', f"obj.{field_name}"
                        ),
                    }
                )
            context["fields"] = fields
        elif kind == ShapeType.LIST:
            if ec2 or shape.flattened:
                key = 'f"{name}.{index}"'
            else:
                tag = shape.member.location_name or "member"
                key = f'f"{{name}}.{tag}.{{index}}"'
            context["item_statement"] = _put_statement(
                service, shape.member_type(), key, "item"
            )
        else:
            entry = 'f"{name}.{index}' if shape.flattened else 'f"{name}.entry.{index}'
            key_tag = shape.key.location_name or "key"
            value_tag = shape.value.location_name or "value"
            context["key_statement"] = _put_statement(
                service, shape.key_type(), f'{entry}.{key_tag}"', "key"
            )
            context["value_statement"] = _put_statement(
                service, shape.value_type(), f'{entry}.{value_tag}"', "value"
            )

        return self.render_template("query_serializer.py.j2", context)

    def generate_deserializer(
        self, name: str, shape: Shape, service: Service
    ) -> Optional[str]:
        generator = XmlDeserializerGenerator(
            self.template_engine, with_response=False, ec2=_is_ec2(service)
        )
        return generator.generate(name, shape, service)

    def timestamp_type(self) -> str:
        # ISO 8601 text, as sent and received
        return "str"


def _is_ec2(service: Service) -> bool:
    return service.metadata.protocol == "ec2"


def _query_key(member_name: str, member: MemberRef, ec2: bool) -> str:
    if ec2:
        return ec2_query_name(member_name, member)
    return member.location_name or member_name


def _put_statement(service: Service, shape_name: str, key: str, value: str) -> str:
    """Statement adding `value` to ``params`` under the key expression `key`."""
    if is_complex(service, shape_name):
        function = serializer_name(mutate_type_name(shape_name))
        return f"{function}(params, {key}, {value})"
    return f"_params.put(params, {key}, {value})"
