"""
REST-XML protocol generator.

Binds members to the URI, query string and headers like REST-JSON, but
request and response bodies are XML documents handled by generated
serializer and deserializer functions.
"""

from typing import List, Optional

from ..core.generator import RECORD_DECORATOR, ProtocolGenerator, StructAttributes
from ..core.naming import (
    deserializer_name,
    generate_field_name,
    mutate_type_name,
    serializer_name,
)
from ..core.service import Operation, Service, Shape, ShapeType
from .rest_binding import body_members, input_context
from .xml_payload import XmlDeserializerGenerator, XmlSerializerGenerator

REST_XML_IMPORTS = [("params", "_params"), ("xml_payload", "_xml")]


class RestXmlGenerator(ProtocolGenerator):
    """Generator for the ``rest-xml`` protocol."""

    @property
    def protocol_name(self) -> str:
        return "rest-xml"

    def generate_prelude(self, service: Service) -> str:
        return self.render_template(
            "protocol_prelude.py.j2", {"imports": REST_XML_IMPORTS}
        )

    def generate_methods(self, service: Service) -> str:
        methods = []
        for context in self.operations_context(service):
            operation = context["operation"]
            context.update(input_context(service, operation.input))
            context["http_method"] = operation.http_method
            context["request_uri"] = operation.request_uri
            context["payload_lines"] = self.payload_lines(service, operation)
            context["response_lines"] = self.response_lines(service, operation)
            methods.append(self.render_template("rest_method.py.j2", context))
        return "\n".join(methods)

    def payload_lines(self, service: Service, operation: Operation) -> List[str]:
        if not operation.input:
            return []

        shape = service.get_shape(operation.input)
        payload = shape.payload_member()

        if payload is not None:
            value = f"input.{generate_field_name(shape.payload)}"
            kind = service.shape_type_for_member(payload)
            if kind == ShapeType.BLOB:
                return [f"request.set_payload({value})"]
            if kind == ShapeType.STRING:
                return [
                    f"if {value} is not None:",
                    f'    request.set_payload({value}.encode("utf-8"))',
                ]
            tag = payload.location_name or service.get_shape(payload.shape).location_name
            return [f"if {value} is not None:"] + [
                f"    {line}"
                for line in self._body_lines(
                    service, payload.shape, tag or shape.payload, value
                )
            ]

        if not body_members(shape):
            return []
        return self._body_lines(
            service, operation.input, shape.location_name or operation.input, "input"
        )

    def _body_lines(
        self, service: Service, shape_name: str, tag: str, value: str
    ) -> List[str]:
        function = serializer_name(mutate_type_name(shape_name))
        lines = [f'body = {function}("{tag}", {value})']
        if service.metadata.xml_namespace:
            lines.append(f'body.set("xmlns", "{service.metadata.xml_namespace}")')
        lines.append("request.set_payload(_xml.to_bytes(body))")
        return lines

    def response_lines(self, service: Service, operation: Operation) -> List[str]:
        if not operation.output:
            return ["return None"]

        function = deserializer_name(mutate_type_name(operation.output))
        shape = service.get_shape(operation.output)
        payload = shape.payload_member()

        if payload is not None and service.shape_type_for_member(payload) in (
            ShapeType.BLOB,
            ShapeType.STRING,
        ):
            return [f"return {function}(None, response)"]

        return [
            "root = _xml.parse(response.body) if response.body.strip() else None",
            f"return {function}(root, response)",
        ]

    def generate_struct_attributes(
        self, struct_name: str, serialized: bool, deserialized: bool
    ) -> StructAttributes:
        return StructAttributes((RECORD_DECORATOR,))

    def generate_serializer(
        self, name: str, shape: Shape, service: Service
    ) -> Optional[str]:
        return XmlSerializerGenerator(self.template_engine).generate(name, shape, service)

    def generate_deserializer(
        self, name: str, shape: Shape, service: Service
    ) -> Optional[str]:
        generator = XmlDeserializerGenerator(self.template_engine, with_response=True)
        return generator.generate(name, shape, service)

    def timestamp_type(self) -> str:
        return "str"
