"""
REST-JSON protocol generator.

Operations use the HTTP method and request URI from the service description.
Members bound to the URI, query string or headers are moved there; the rest
of the input is sent as a JSON body unless one member is the whole payload.
"""

from typing import List

from ..core.generator import ProtocolGenerator, StructAttributes
from ..core.naming import generate_field_name, mutate_type_name
from ..core.service import Operation, Service, ShapeType
from .json_generator import json_struct_attributes
from .rest_binding import body_members, input_context, located_members, output_extras

REST_JSON_IMPORTS = [("params", "_params"), ("serialization", "_serde")]


class RestJsonGenerator(ProtocolGenerator):
    """Generator for the ``rest-json`` protocol."""

    @property
    def protocol_name(self) -> str:
        return "rest-json"

    def generate_prelude(self, service: Service) -> str:
        return self.render_template(
            "protocol_prelude.py.j2", {"imports": REST_JSON_IMPORTS}
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
                content_type, encoded = "text/plain", f'{value}.encode("utf-8")'
            else:
                content_type, encoded = "application/json", f"_serde.to_json({value})"
            return [
                f"if {value} is not None:",
                f'    request.set_content_type("{content_type}")',
                f"    request.set_payload({encoded})",
            ]

        if not body_members(shape):
            return []

        exclude = [member_name for member_name, _ in located_members(shape)]
        lines = ['request.set_content_type("application/json")']
        if exclude:
            names = ", ".join(f'"{name}"' for name in exclude)
            lines.append(f"request.set_payload(_serde.to_json(input, exclude=({names},)))")
        else:
            lines.append("request.set_payload(_serde.to_json(input))")
        return lines

    def response_lines(self, service: Service, operation: Operation) -> List[str]:
        if not operation.output:
            return ["return None"]

        output_type = mutate_type_name(operation.output)
        shape = service.get_shape(operation.output)
        extras = output_extras(shape)
        body = "response.body"

        payload = shape.payload_member()
        if payload is not None:
            body = "None"
            kind = service.shape_type_for_member(payload)
            if kind == ShapeType.BLOB:
                extras.append((shape.payload, "response.body"))
            elif kind == ShapeType.STRING:
                extras.append((shape.payload, "response.text"))
            else:
                extras.append((shape.payload, "_serde.parse_json_body(response.body)"))

        if not extras:
            return [f"return _serde.from_json({output_type}, {body})"]

        lines = [
            "return _serde.from_json(",
            f"    {output_type},",
            f"    {body},",
            "    extra={",
        ]
        lines.extend(f'        "{name}": {expr},' for name, expr in extras)
        lines.extend(["    },", ")"])
        return lines

    def generate_struct_attributes(
        self, struct_name: str, serialized: bool, deserialized: bool
    ) -> StructAttributes:
        return json_struct_attributes(serialized, deserialized)

    def timestamp_type(self) -> str:
        return "float"

