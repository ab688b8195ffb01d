"""
Signed requests and their dispatch over HTTP.

`SignedRequest` collects everything a generated method knows about a call
(method, path, query parameters, headers, payload) and signs it with
botocore's Signature Version 4 signers. A `DispatchSignedRequest` sends it
and returns an `HttpResponse`; `HttpClient` is the default dispatcher built on
requests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl, quote, urlencode

import requests
from botocore.auth import S3SigV4Auth, SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from requests.structures import CaseInsensitiveDict

from ..logging_config import get_logger
from .credentials import AwsCredentials
from .region import Region

logger = get_logger(__name__)

UNRESERVED = "-_.~"


class HttpDispatchError(Exception):
    """Raised when a request could not be sent or no response was received."""

    pass


@dataclass
class HttpResponse:
    """Raw response returned by a dispatcher."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.headers = CaseInsensitiveDict(self.headers)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class SignedRequest:
    """An HTTP request addressed to one service in one region.

    Args:
        method: HTTP method.
        service: Signing name of the service.
        region: Target region.
        path: Request path; a literal query string (``/bucket?acl``) is
            split off into the parameters.
        endpoint_prefix: Host prefix used to build the endpoint, defaults to
            the signing name.
    """

    def __init__(
        self,
        method: str,
        service: str,
        region: Region,
        path: str = "/",
        endpoint_prefix: Optional[str] = None,
    ):
        self.method = method.upper()
        self.service = service
        self.region = region
        self.endpoint_prefix = endpoint_prefix or service
        self.params: Dict[str, str] = {}
        self.headers: Dict[str, str] = {}
        self.payload: Optional[bytes] = None

        path, _, query = path.partition("?")
        self.path = path or "/"
        for key, value in parse_qsl(query, keep_blank_values=True):
            self.params[key] = value

    def add_param(self, name: str, value: str) -> None:
        self.params[name] = value

    def set_params(self, params: Mapping[str, str]) -> None:
        self.params.update(params)

    def add_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def set_content_type(self, content_type: str) -> None:
        self.headers["Content-Type"] = content_type

    def set_payload(self, payload: Optional[bytes]) -> None:
        self.payload = payload

    def set_form_params(self, params: Mapping[str, str]) -> None:
        """Send parameters as a form-encoded body (Query protocol)."""
        self.set_content_type("application/x-www-form-urlencoded; charset=utf-8")
        self.payload = urlencode(sorted(params.items())).encode("utf-8")

    def endpoint(self) -> str:
        return self.region.endpoint_url(self.endpoint_prefix)

    def url(self) -> str:
        url = f"{self.endpoint()}{quote(self.path, safe='/%' + UNRESERVED)}"
        if self.params:
            url = f"{url}?{self._canonical_query()}"
        return url

    def sign(self, credentials: AwsCredentials) -> None:
        """Add Signature Version 4 headers for `credentials`.

        S3 signs the payload hash into an extra header and does not
        double-encode the path, so it gets botocore's S3 signer.
        """
        aws_request = AWSRequest(
            method=self.method,
            url=self.url(),
            data=self.payload or b"",
            headers=dict(self.headers),
        )
        signer_class = S3SigV4Auth if self.service == "s3" else SigV4Auth
        signer = signer_class(
            Credentials(
                credentials.access_key_id,
                credentials.secret_access_key,
                credentials.session_token,
            ),
            self.service,
            self.region.name,
        )
        signer.add_auth(aws_request)
        self.headers = dict(aws_request.headers.items())

    def _canonical_query(self) -> str:
        return "&".join(
            f"{quote(key, safe=UNRESERVED)}={quote(value, safe=UNRESERVED)}"
            for key, value in sorted(self.params.items())
        )

    def __repr__(self) -> str:
        return f"SignedRequest({self.method} {self.service} {self.region.name} {self.path})"


class DispatchSignedRequest(ABC):
    """Sends signed requests."""

    @abstractmethod
    def dispatch(
        self, request: SignedRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        """Send `request`; raise HttpDispatchError if no response was received."""
        pass


class HttpClient(DispatchSignedRequest):
    """Dispatcher backed by a `requests.Session`."""

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()

    def dispatch(
        self, request: SignedRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        url = request.url()
        logger.debug("Dispatching %s %s", request.method, url)
        try:
            response = self._session.request(
                request.method,
                url,
                headers=request.headers,
                data=request.payload,
                timeout=timeout,
            )
        except requests.exceptions.RequestException as e:
            raise HttpDispatchError(f"Failed to dispatch {request!r}: {e}") from e

        return HttpResponse(
            status=response.status_code,
            body=response.content,
            headers=response.headers,
        )

    def close(self) -> None:
        self._session.close()
