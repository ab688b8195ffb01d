"""
Identifier translation for generated code.

Maps names from the service description onto Python identifiers: snake_case
for fields and methods, capitalized names for types, and a small hand-kept
table of shape names that would collide with names the generated module
already uses.
"""

import keyword
import re

# Field names that must never appear bare in generated code. Builtins used in
# generated annotations are reserved too: a field default named `str` would
# shadow the type when annotations are resolved inside the class.
RESERVED_FIELD_NAMES = frozenset(keyword.kwlist) | {
    "type",
    "bool",
    "bytes",
    "float",
    "int",
    "str",
}

FIELD_ESCAPE_SUFFIX = "_"

# Exact shape names remapped to avoid collisions. Maintained by hand: add an
# entry when a new service model introduces a clash.
TYPE_NAME_COLLISIONS = {
    # S3 has an `Error` shape that collides with the error types every client defines
    "Error": "S3Error",
    # EC2 has a CancelSpotFleetRequestsError shape that collides with the
    # error type derived from the CancelSpotFleetRequests shape
    "CancelSpotFleetRequests": "EC2CancelSpotFleetRequests",
}


def to_snake_case(name: str) -> str:
    """Convert to snake_case, keeping runs of capitals together."""
    name = re.sub(r"[^a-zA-Z0-9_]", "_", name)

    # SSEKMSKeyId -> SSEKMS_KeyId
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    # KeyId -> Key_Id
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

    name = re.sub(r"_+", "_", name.lower())
    name = name.strip("_")

    if name and name[0].isdigit():
        name = f"_{name}"
    return name or "field"


def capitalize_first(word: str) -> str:
    """Uppercase only the first character. Empty input is returned unchanged."""
    if not word:
        return ""
    return word[0].upper() + word[1:]


def generate_field_name(member_name: str) -> str:
    """Translate a member name to a field name, escaping reserved words."""
    name = to_snake_case(member_name)
    if name in RESERVED_FIELD_NAMES:
        return f"{name}{FIELD_ESCAPE_SUFFIX}"
    return name


def mutate_type_name(type_name: str) -> str:
    """Translate a shape name to a type name.

    Capitalizes the name, drops underscores (some CloudFront shapes carry
    them) and applies the collision table.
    """
    without_underscores = capitalize_first(type_name).replace("_", "")
    return TYPE_NAME_COLLISIONS.get(without_underscores, without_underscores)


def error_type_name(name: str) -> str:
    """Name of the error class generated for an exception shape."""
    return f"{mutate_type_name(name)}Error"


def method_name(operation_name: str) -> str:
    """Client method name for an operation."""
    return generate_field_name(operation_name)


def serializer_name(type_name: str) -> str:
    return f"serialize_{to_snake_case(type_name)}"


def deserializer_name(type_name: str) -> str:
    return f"deserialize_{to_snake_case(type_name)}"


def escape_doc(text: str) -> str:
    """Escape documentation so it stays a valid string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')
