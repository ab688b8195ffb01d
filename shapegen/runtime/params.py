"""Query parameters, URI templates and headers."""

import re
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional
from urllib.parse import quote

from .request import HttpResponse, SignedRequest
from .serialization import format_scalar

URI_LABEL = re.compile(r"\{([^}+]+)(\+?)\}")


def put(params: MutableMapping[str, str], key: str, value: Any) -> None:
    """Set a parameter; None values are left out and lists are comma-joined."""
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        params[key] = ",".join(format_scalar(item) for item in value)
    else:
        params[key] = format_scalar(value)


def put_all(params: MutableMapping[str, str], values: Optional[Mapping[str, Any]]) -> None:
    """Set every entry of a map member bound to the query string."""
    for key, value in (values or {}).items():
        put(params, key, value)


def expand_uri(template: str, values: Mapping[str, Any]) -> str:
    """Fill ``{Label}`` and greedy ``{Label+}`` placeholders in a request URI."""

    def replace(match: "re.Match[str]") -> str:
        name, greedy = match.group(1), match.group(2) == "+"
        value = values.get(name)
        if value is None:
            raise ValueError(f"Missing value for URI label '{name}' in {template}")
        return quote(format_scalar(value), safe="/-_.~" if greedy else "-_.~")

    return URI_LABEL.sub(replace, template)


def put_header(request: SignedRequest, name: str, value: Any) -> None:
    if value is not None:
        request.add_header(name, format_scalar(value))


def put_prefixed_headers(
    request: SignedRequest, prefix: str, values: Optional[Mapping[str, Any]]
) -> None:
    for name, value in (values or {}).items():
        put_header(request, f"{prefix}{name}", value)


def header(
    response: Optional[HttpResponse], name: str, parser: Callable[[str], Any] = str
) -> Any:
    """Typed value of a response header, or None when absent."""
    if response is None or name not in response.headers:
        return None
    return parser(response.headers[name])


def prefixed_headers(
    response: Optional[HttpResponse], prefix: str
) -> Optional[Dict[str, str]]:
    if response is None:
        return None
    lowered = prefix.lower()
    found = {
        name[len(prefix):]: value
        for name, value in response.headers.items()
        if name.lower().startswith(lowered)
    }
    return found or None


def status(response: Optional[HttpResponse]) -> Optional[int]:
    return response.status if response is not None else None
