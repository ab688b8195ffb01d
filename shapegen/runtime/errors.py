"""Extract error codes and messages from failed responses."""

import json
from typing import Tuple
from xml.etree import ElementTree

from .request import HttpResponse


def parse_json_error(response: HttpResponse) -> Tuple[str, str]:
    """Return ``(code, message)`` for a JSON-family error response.

    The code comes from the ``x-amzn-ErrorType`` header when present, then from
    ``__type`` or ``code`` in the body. Any ``prefix#`` or ``:suffix`` is
    stripped.
    """
    code = response.headers.get("x-amzn-ErrorType", "")
    message = ""

    try:
        data = json.loads(response.body) if response.body.strip() else {}
    except ValueError:
        data = {}

    if isinstance(data, dict):
        code = code or data.get("__type") or data.get("code") or data.get("Code") or ""
        message = data.get("message") or data.get("Message") or ""

    code = code.split(":", 1)[0].rsplit("#", 1)[-1]
    return code, message


def parse_xml_error(response: HttpResponse) -> Tuple[str, str]:
    """Return ``(code, message)`` for an XML-family error response."""
    try:
        root = ElementTree.fromstring(response.body)
    except ElementTree.ParseError:
        return "", response.text

    code = ""
    message = ""
    for node in root.iter():
        tag = node.tag.split("}", 1)[-1] if isinstance(node.tag, str) else ""
        if tag == "Code" and not code:
            code = (node.text or "").strip()
        elif tag == "Message" and not message:
            message = (node.text or "").strip()
    return code, message
