"""
Runtime support for generated service clients.

Generated modules import these submodules; applications mostly need
`HttpClient`, a credentials provider, a `Region` and, for blocking calls, an
`ExecutionContext`.
"""

from .credentials import (
    AwsCredentials,
    CredentialsError,
    EnvironmentProvider,
    ProvideAwsCredentials,
    StaticProvider,
)
from .future import ExecutionContext, ServiceFuture
from .region import Region, default_region
from .request import (
    DispatchSignedRequest,
    HttpClient,
    HttpDispatchError,
    HttpResponse,
    SignedRequest,
)
from .serialization import DeserializationError

__all__ = [
    "AwsCredentials",
    "CredentialsError",
    "EnvironmentProvider",
    "ProvideAwsCredentials",
    "StaticProvider",
    "ExecutionContext",
    "ServiceFuture",
    "Region",
    "default_region",
    "DispatchSignedRequest",
    "HttpClient",
    "HttpDispatchError",
    "HttpResponse",
    "SignedRequest",
    "DeserializationError",
]
