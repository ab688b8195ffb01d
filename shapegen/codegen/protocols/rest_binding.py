"""
HTTP binding of input and output members for the REST protocols.

Members marked with a ``location`` travel in the request URI, the query
string, headers or the status code instead of the body.
"""

from typing import Any, Dict, List, Tuple

from ..core.naming import generate_field_name
from ..core.service import MemberRef, Service, Shape, ShapeType


def located_members(shape: Shape) -> List[Tuple[str, MemberRef]]:
    return [
        (member_name, member)
        for member_name, member in shape.members.items()
        if member.location and not member.deprecated
    ]


def body_members(shape: Shape) -> List[Tuple[str, MemberRef]]:
    return [
        (member_name, member)
        for member_name, member in shape.members.items()
        if not member.location and not member.deprecated and member_name != shape.payload
    ]


def bind_input(service: Service, shape: Shape) -> Dict[str, Any]:
    """Statements placing input members in the URI, query string and headers.

    Returns:
        Template context with ``uri_values`` (label, expression) pairs,
        ``query_lines`` and ``header_lines``.
    """
    uri_values = []
    query_lines = []
    header_lines = []

    for member_name, member in located_members(shape):
        value = f"input.{generate_field_name(member_name)}"
        location_name = member.location_name or member_name

        if member.location == "uri":
            uri_values.append((location_name, value))
        elif member.location == "querystring":
            if service.shape_type_for_member(member) == ShapeType.MAP:
                query_lines.append(f"_params.put_all(params, {value})")
            else:
                query_lines.append(f'_params.put(params, "{location_name}", {value})')
        elif member.location == "header":
            header_lines.append(f'_params.put_header(request, "{location_name}", {value})')
        elif member.location == "headers":
            header_lines.append(
                f'_params.put_prefixed_headers(request, "{location_name}", {value})'
            )

    return {
        "uri_values": uri_values,
        "query_lines": query_lines,
        "header_lines": header_lines,
    }


def output_extras(shape: Shape) -> List[Tuple[str, str]]:
    """(member name, expression) pairs for output members read outside the body."""
    extras = []
    for member_name, member in located_members(shape):
        location_name = member.location_name or member_name
        if member.location == "header":
            extras.append((member_name, f'_params.header(response, "{location_name}")'))
        elif member.location == "headers":
            extras.append(
                (member_name, f'_params.prefixed_headers(response, "{location_name}")')
            )
        elif member.location == "statusCode":
            extras.append((member_name, "_params.status(response)"))
    return extras


def input_context(service: Service, operation_input: str) -> Dict[str, Any]:
    if not operation_input:
        return {"uri_values": [], "query_lines": [], "header_lines": []}
    return bind_input(service, service.get_shape(operation_input))
