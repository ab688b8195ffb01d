"""
XML payload helpers used by Query and REST-XML clients.

Generated deserializers read elements through the small parser functions
here (`text`, `integer`, ...); the same functions accept plain strings so they
also convert header values. Generated serializers build elements with
`element` and `append_text`.
"""

import base64
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union
from xml.etree import ElementTree

from .serialization import DeserializationError, format_scalar

Element = ElementTree.Element

T = TypeVar("T")
Parser = Callable[[Any], T]


def parse(body: bytes) -> Element:
    """Parse a response body, dropping namespaces from tag names."""
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as e:
        raise DeserializationError(f"Invalid XML response: {e}") from e

    for node in root.iter():
        if isinstance(node.tag, str) and "}" in node.tag:
            node.tag = node.tag.split("}", 1)[1]
    return root


def result_node(root: Element, wrapper: Optional[str]) -> Element:
    """Element holding an operation's output (``<OpResult>`` when wrapped)."""
    if wrapper is None:
        return root
    if root.tag == wrapper:
        return root
    node = root.find(wrapper)
    if node is None:
        raise DeserializationError(f"Response has no <{wrapper}> element")
    return node


def required(node: Optional[Element], name: str, parser: Parser) -> Any:
    if node is None:
        raise DeserializationError(f"Response has no body, <{name}> is required")
    child = node.find(name)
    if child is None:
        raise DeserializationError(f"<{node.tag}> has no required <{name}> element")
    return parser(child)


def optional(node: Optional[Element], name: str, parser: Parser) -> Any:
    if node is None:
        return None
    child = node.find(name)
    if child is None:
        return None
    return parser(child)


def flattened(
    node: Optional[Element], name: str, parser: Parser
) -> Optional[List[Any]]:
    """Values of a flattened list: repeated elements directly inside `node`."""
    if node is None:
        return None
    children = node.findall(name)
    if not children:
        return None
    return [parser(child) for child in children]


def payload(node: Optional[Element], parser: Parser) -> Any:
    """Parse the body element itself, used for members bound to the payload."""
    if node is None:
        return None
    return parser(node)


def items(node: Element, tag: str, parser: Parser) -> List[Any]:
    """Values of a wrapped list: ``<member>`` children of `node`."""
    return [parser(child) for child in node.findall(tag)]


def entries(node: Element, key_parser: Parser, value_parser: Parser) -> Dict[Any, Any]:
    """Map entries of the form ``<entry><key/><value/></entry>``."""
    result = {}
    for entry in node:
        key = entry.find("key")
        value = entry.find("value")
        if key is None or value is None:
            raise DeserializationError(f"Malformed map entry in <{node.tag}>")
        result[key_parser(key)] = value_parser(value)
    return result


def text(value: Union[Element, str]) -> str:
    if isinstance(value, str):
        return value
    return value.text or ""


def integer(value: Union[Element, str]) -> int:
    return int(text(value).strip())


def floating(value: Union[Element, str]) -> float:
    return float(text(value).strip())


def boolean(value: Union[Element, str]) -> bool:
    return text(value).strip().lower() == "true"


def blob(value: Union[Element, str]) -> bytes:
    return base64.b64decode(text(value))


def element(tag: str, namespace: Optional[str] = None) -> Element:
    node = ElementTree.Element(tag)
    if namespace:
        node.set("xmlns", namespace)
    return node


def child(parent: Element, tag: str) -> Element:
    return ElementTree.SubElement(parent, tag)


def append_text(parent: Element, tag: str, value: Any) -> None:
    """Append ``<tag>value</tag>`` unless value is None."""
    if value is None:
        return
    child = ElementTree.SubElement(parent, tag)
    child.text = format_scalar(value)


def to_bytes(node: Element) -> bytes:
    return ElementTree.tostring(node, encoding="utf-8")
