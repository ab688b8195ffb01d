"""
Service description model.

Converts a botocore-style service document into a normalized, read-only
representation that the compiler and protocol generators work with.
Insertion order of operations, shapes and members is preserved: it is the
order in which declarations are emitted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ShapeType(str, Enum):
    """Shape kinds understood by the generator."""

    STRUCTURE = "structure"
    LIST = "list"
    MAP = "map"
    BLOB = "blob"
    BOOLEAN = "boolean"
    DOUBLE = "double"
    FLOAT = "float"
    INTEGER = "integer"
    LONG = "long"
    STRING = "string"
    TIMESTAMP = "timestamp"

    @classmethod
    def lookup(cls, type_name: str) -> Optional["ShapeType"]:
        """Return the kind for a raw type name, or None if unsupported."""
        try:
            return cls(type_name)
        except ValueError:
            return None


@dataclass(frozen=True)
class MemberRef:
    """Reference from a structure member (or list/map slot) to a shape."""

    shape: str
    documentation: Optional[str] = None
    deprecated: bool = False
    location: Optional[str] = None  # uri, querystring, header, headers, statusCode
    location_name: Optional[str] = None
    query_name: Optional[str] = None
    flattened: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemberRef":
        return cls(
            shape=data["shape"],
            documentation=data.get("documentation"),
            deprecated=bool(data.get("deprecated", False)),
            location=data.get("location"),
            location_name=data.get("locationName"),
            query_name=data.get("queryName"),
            flattened=bool(data.get("flattened", False)),
        )


@dataclass(frozen=True)
class Shape:
    """A named data type in the service description."""

    name: str
    type_name: str
    documentation: Optional[str] = None
    exception: bool = False
    members: Dict[str, MemberRef] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    member: Optional[MemberRef] = None
    key: Optional[MemberRef] = None
    value: Optional[MemberRef] = None
    error_code: Optional[str] = None
    location_name: Optional[str] = None
    flattened: bool = False
    payload: Optional[str] = None  # member sent or received as the whole body

    @property
    def shape_type(self) -> Optional[ShapeType]:
        """Kind of this shape, or None when the raw type is unsupported."""
        return ShapeType.lookup(self.type_name)

    def is_required(self, member_name: str) -> bool:
        return member_name in self.required

    def member_type(self) -> str:
        """Element shape name of a list shape."""
        if self.member is None:
            raise ValueError(f"Shape {self.name} has no list member")
        return self.member.shape

    def key_type(self) -> str:
        if self.key is None:
            raise ValueError(f"Shape {self.name} has no map key")
        return self.key.shape

    def value_type(self) -> str:
        if self.value is None:
            raise ValueError(f"Shape {self.name} has no map value")
        return self.value.shape

    def payload_member(self) -> Optional[MemberRef]:
        return self.members.get(self.payload) if self.payload else None

    @property
    def wire_code(self) -> str:
        """Error code used on the wire for an exception shape."""
        return self.error_code or self.name

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "Shape":
        members = {
            member_name: MemberRef.from_dict(member)
            for member_name, member in data.get("members", {}).items()
        }
        error = data.get("error") or {}

        def ref(key: str) -> Optional[MemberRef]:
            return MemberRef.from_dict(data[key]) if key in data else None

        return cls(
            name=name,
            type_name=data["type"],
            documentation=data.get("documentation"),
            exception=bool(data.get("exception", False)),
            members=members,
            required=list(data.get("required", [])),
            member=ref("member"),
            key=ref("key"),
            value=ref("value"),
            error_code=error.get("code"),
            location_name=data.get("locationName"),
            flattened=bool(data.get("flattened", False)),
            payload=data.get("payload"),
        )


@dataclass(frozen=True)
class Operation:
    """A remote call with an optional input and output shape."""

    name: str
    http_method: str = "POST"
    request_uri: str = "/"
    input: Optional[str] = None
    output: Optional[str] = None
    result_wrapper: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    documentation: Optional[str] = None
    deprecated: bool = False

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "Operation":
        http = data.get("http", {})
        output = data.get("output") or {}
        return cls(
            name=data.get("name", name),
            http_method=http.get("method", "POST"),
            request_uri=http.get("requestUri", "/"),
            input=(data.get("input") or {}).get("shape"),
            output=output.get("shape"),
            result_wrapper=output.get("resultWrapper"),
            errors=[error["shape"] for error in data.get("errors", [])],
            documentation=data.get("documentation"),
            deprecated=bool(data.get("deprecated", False)),
        )


@dataclass(frozen=True)
class ServiceMetadata:
    """Service-wide settings from the description's ``metadata`` block."""

    protocol: str
    service_full_name: str
    service_abbreviation: Optional[str] = None
    endpoint_prefix: Optional[str] = None
    signing_name: Optional[str] = None
    target_prefix: Optional[str] = None
    json_version: str = "1.1"
    api_version: Optional[str] = None
    xml_namespace: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceMetadata":
        xml_namespace = data.get("xmlNamespace")
        if isinstance(xml_namespace, dict):
            xml_namespace = xml_namespace.get("uri")
        return cls(
            protocol=data["protocol"],
            service_full_name=data["serviceFullName"],
            service_abbreviation=data.get("serviceAbbreviation"),
            endpoint_prefix=data.get("endpointPrefix"),
            signing_name=data.get("signingName"),
            target_prefix=data.get("targetPrefix"),
            json_version=data.get("jsonVersion", "1.1"),
            api_version=data.get("apiVersion"),
            xml_namespace=xml_namespace,
        )


@dataclass(frozen=True)
class Service:
    """Complete service description for one generation run."""

    metadata: ServiceMetadata
    shapes: Dict[str, Shape] = field(default_factory=dict)
    operations: Dict[str, Operation] = field(default_factory=dict)
    documentation: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Service":
        """Build a service from a parsed botocore JSON document."""
        return cls(
            metadata=ServiceMetadata.from_dict(data["metadata"]),
            shapes={
                name: Shape.from_dict(name, shape)
                for name, shape in data.get("shapes", {}).items()
            },
            operations={
                name: Operation.from_dict(name, operation)
                for name, operation in data.get("operations", {}).items()
            },
            documentation=data.get("documentation"),
        )

    def service_name(self) -> str:
        """Human readable name used in generated doc strings."""
        return self.metadata.service_abbreviation or self.metadata.service_full_name

    def service_type_name(self) -> str:
        """Identifier-safe service name, e.g. ``DynamoDb`` or ``S3``."""
        name = self.service_name()
        for prefix in ("Amazon", "AWS"):
            if name.startswith(prefix):
                name = name[len(prefix):]
        return "".join(ch for ch in name if ch not in " -._/()")

    def client_type_name(self) -> str:
        return f"{self.service_type_name()}Client"

    def error_type_name(self) -> str:
        """Name of the generated base error class."""
        return f"{self.client_type_name()}Error"

    def signing_name(self) -> str:
        return (
            self.metadata.signing_name
            or self.metadata.endpoint_prefix
            or self.service_type_name().lower()
        )

    def endpoint_prefix(self) -> str:
        return self.metadata.endpoint_prefix or self.signing_name()

    def get_shape(self, name: str) -> Shape:
        try:
            return self.shapes[name]
        except KeyError:
            raise KeyError(f"Shape '{name}' is not defined in the service") from None

    def shape_for_member(self, member: MemberRef) -> Optional[Shape]:
        return self.shapes.get(member.shape)

    def shape_type_for_member(self, member: MemberRef) -> Optional[ShapeType]:
        shape = self.shape_for_member(member)
        return shape.shape_type if shape else None

    def exception_shapes(self) -> List[Shape]:
        return [shape for shape in self.shapes.values() if shape.exception]
