"""
XML serializer and deserializer generation shared by Query and REST-XML.

Both protocols read responses as XML documents. REST-XML also writes request
bodies as XML, and its output structures may take members from response
headers and the status code.
"""

from typing import Any, Dict, List, Optional

from ..core.naming import (
    capitalize_first,
    deserializer_name,
    generate_field_name,
    mutate_type_name,
    serializer_name,
)
from ..core.service import MemberRef, Service, Shape, ShapeType
from ..core.templates import TemplateEngine

COMPLEX_TYPES = (ShapeType.STRUCTURE, ShapeType.LIST, ShapeType.MAP)

PRIMITIVE_PARSERS = {
    ShapeType.BLOB: "_xml.blob",
    ShapeType.BOOLEAN: "_xml.boolean",
    ShapeType.DOUBLE: "_xml.floating",
    ShapeType.FLOAT: "_xml.floating",
    ShapeType.INTEGER: "_xml.integer",
    ShapeType.LONG: "_xml.integer",
    ShapeType.STRING: "_xml.text",
    ShapeType.TIMESTAMP: "_xml.text",
}

# Members bound outside the body
HTTP_LOCATIONS = ("uri", "querystring", "header", "headers", "statusCode")


def is_complex(service: Service, shape_name: str) -> bool:
    return service.get_shape(shape_name).shape_type in COMPLEX_TYPES


def parser_for(service: Service, shape_name: str) -> str:
    """Expression naming the function that parses `shape_name` from an element."""
    shape = service.get_shape(shape_name)
    if shape.shape_type in COMPLEX_TYPES:
        return deserializer_name(mutate_type_name(shape_name))
    return PRIMITIVE_PARSERS.get(shape.shape_type, "_xml.text")


def is_flattened(service: Service, member: MemberRef) -> bool:
    shape = service.get_shape(member.shape)
    return shape.shape_type == ShapeType.LIST and (member.flattened or shape.flattened)


def element_name(member_name: str, member: MemberRef) -> str:
    return member.location_name or member_name


def ec2_element_name(member_name: str, member: MemberRef) -> str:
    """EC2 responses use lower camel case element names."""
    if member.location_name:
        return member.location_name
    return member_name[:1].lower() + member_name[1:]


def ec2_query_name(member_name: str, member: MemberRef) -> str:
    if member.query_name:
        return member.query_name
    return capitalize_first(member.location_name or member_name)


class XmlDeserializerGenerator:
    """Generates ``deserialize_<type>(node)`` functions."""

    def __init__(
        self,
        template_engine: TemplateEngine,
        with_response: bool = False,
        ec2: bool = False,
    ):
        self.template_engine = template_engine
        self.with_response = with_response
        self.ec2 = ec2

    def generate(self, type_name: str, shape: Shape, service: Service) -> Optional[str]:
        kind = shape.shape_type
        if kind not in COMPLEX_TYPES:
            return None

        context: Dict[str, Any] = {
            "function": deserializer_name(type_name),
            "type_name": type_name,
            "kind": kind.value,
            "parameters": "node: _xml.Element",
        }

        if kind == ShapeType.STRUCTURE:
            if self.with_response:
                context["parameters"] = (
                    "node: _t.Optional[_xml.Element], "
                    "response: _t.Optional[_request.HttpResponse] = None"
                )
            context["fields"] = self.struct_fields(shape, service)
        elif kind == ShapeType.LIST:
            member = shape.member
            context["item_tag"] = member.location_name or "member"
            context["item_parser"] = parser_for(service, member.shape)
        else:
            context["key_parser"] = parser_for(service, shape.key_type())
            context["value_parser"] = parser_for(service, shape.value_type())

        return self.template_engine.render_template("xml_deserializer.py.j2", context)

    def struct_fields(self, shape: Shape, service: Service) -> List[Dict[str, str]]:
        fields = []
        for member_name, member in shape.members.items():
            if member.deprecated:
                continue
            fields.append(
                {
                    "name": generate_field_name(member_name),
                    "expr": self.member_expr(shape, member_name, member, service),
                }
            )
        return fields

    def member_expr(
        self, shape: Shape, member_name: str, member: MemberRef, service: Service
    ) -> str:
        """Expression reading one member from `node` (or from `response`)."""
        if self.with_response:
            location_name = member.location_name or member_name
            if member.location == "header":
                parser = PRIMITIVE_PARSERS.get(
                    service.shape_type_for_member(member), "_xml.text"
                )
                return f'_params.header(response, "{location_name}", {parser})'
            if member.location == "headers":
                return f'_params.prefixed_headers(response, "{location_name}")'
            if member.location == "statusCode":
                return "_params.status(response)"
            if shape.payload == member_name:
                return self.payload_expr(member, service)

        if self.ec2:
            tag = ec2_element_name(member_name, member)
        else:
            tag = element_name(member_name, member)

        if is_flattened(service, member):
            list_shape = service.get_shape(member.shape)
            tag = list_shape.member.location_name or tag
            return (
                f'_xml.flattened(node, "{tag}", '
                f"{parser_for(service, list_shape.member_type())})"
            )

        accessor = "required" if shape.is_required(member_name) else "optional"
        return f'_xml.{accessor}(node, "{tag}", {parser_for(service, member.shape)})'

    def payload_expr(self, member: MemberRef, service: Service) -> str:
        kind = service.shape_type_for_member(member)
        if kind == ShapeType.BLOB:
            return "response.body if response is not None else None"
        if kind == ShapeType.STRING:
            return "response.text if response is not None else None"
        return f"_xml.payload(node, {parser_for(service, member.shape)})"


class XmlSerializerGenerator:
    """Generates ``serialize_<type>(tag, obj)`` functions building elements."""

    def __init__(self, template_engine: TemplateEngine):
        self.template_engine = template_engine

    def generate(self, type_name: str, shape: Shape, service: Service) -> Optional[str]:
        kind = shape.shape_type
        if kind not in COMPLEX_TYPES:
            return None

        context: Dict[str, Any] = {
            "function": serializer_name(type_name),
            "type_name": type_name,
            "kind": kind.value,
        }

        if kind == ShapeType.STRUCTURE:
            context["fields"] = self.struct_fields(shape, service)
        elif kind == ShapeType.LIST:
            tag = shape.member.location_name or "member"
            context["item_line"] = append_line(
                service, shape.member_type(), "node", tag, "item"
            )
        else:
            key_tag = shape.key.location_name or "key"
            value_tag = shape.value.location_name or "value"
            context["key_line"] = append_line(
                service, shape.key_type(), "entry", key_tag, "key"
            )
            context["value_line"] = append_line(
                service, shape.value_type(), "entry", value_tag, "value"
            )

        return self.template_engine.render_template("xml_serializer.py.j2", context)

    def struct_fields(self, shape: Shape, service: Service) -> List[Dict[str, Any]]:
        fields = []
        for member_name, member in shape.members.items():
            if member.deprecated or member.location in HTTP_LOCATIONS:
                continue

            field_name = generate_field_name(member_name)
            tag = element_name(member_name, member)
            value = f"obj.{field_name}"

            if is_flattened(service, member):
                list_shape = service.get_shape(member.shape)
                element_shape = list_shape.member_type()
                tag = list_shape.member.location_name or tag
                lines = [
                    f"for item in {value}:",
                    "    " + append_line(service, element_shape, "node", tag, "item"),
                ]
            else:
                lines = [append_line(service, member.shape, "node", tag, value)]

            fields.append({"name": field_name, "lines": lines})
        return fields


def append_line(
    service: Service, shape_name: str, parent: str, tag: str, value: str
) -> str:
    """Statement appending `value` to `parent` as a ``<tag>`` element."""
    if is_complex(service, shape_name):
        function = serializer_name(mutate_type_name(shape_name))
        return f'{parent}.append({function}("{tag}", {value}))'
    return f'_xml.append_text({parent}, "{tag}", {value})'
