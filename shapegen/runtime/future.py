"""
The result type returned by every generated client method.

A `ServiceFuture` does nothing until it is awaited (or run through
`sync`). Resolution happens in two phases:

1. obtain credentials, sign and dispatch the request, bounded by the
   optional timeout;
2. run the response handler once on the received response.

An error in either phase ends the call; nothing is retried here.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Generic, Optional, TypeVar

from ..logging_config import get_logger
from .credentials import CredentialsError, ProvideAwsCredentials
from .request import DispatchSignedRequest, HttpDispatchError, HttpResponse, SignedRequest

logger = get_logger(__name__)

T = TypeVar("T")

ResponseHandler = Callable[[HttpResponse], Any]
ErrorMapper = Callable[[Exception], Exception]


class ExecutionContext:
    """Owns the worker threads used to dispatch requests for blocking callers.

    Create one, share it between calls, and shut it down when done::

        with ExecutionContext() as context:
            result = client.get_thing(request).sync(context)
    """

    def __init__(self, max_workers: Optional[int] = None):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="shapegen"
        )
        self._closed = False

    @property
    def executor(self) -> ThreadPoolExecutor:
        return self._executor

    @property
    def closed(self) -> bool:
        return self._closed

    def run(self, future: "ServiceFuture[T]") -> T:
        """Block until `future` resolves; return its value or raise its error."""
        if self._closed:
            raise RuntimeError("ExecutionContext has been shut down")
        return asyncio.run(future._resolve(self._executor))

    def shutdown(self, wait: bool = True) -> None:
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ExecutionContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class ServiceFuture(Generic[T]):
    """Lazily started, cancellable result of a service call."""

    def __init__(
        self,
        dispatcher: DispatchSignedRequest,
        credentials_provider: ProvideAwsCredentials,
        request: SignedRequest,
        response_handler: ResponseHandler,
        error_mapper: Optional[ErrorMapper] = None,
    ):
        self._dispatcher = dispatcher
        self._credentials_provider = credentials_provider
        self._request = request
        self._response_handler = response_handler
        self._error_mapper = error_mapper
        self._timeout: Optional[float] = None
        self._cancelled = False
        self._started = False
        self._done = False
        self._ready: Optional[tuple] = None

    @classmethod
    def from_result(cls, value: T) -> "ServiceFuture[T]":
        """A future that resolves to `value` without dispatching anything."""
        future = cls.__new__(cls)
        future._init_ready((value, None))
        return future

    @classmethod
    def from_error(cls, error: Exception) -> "ServiceFuture[Any]":
        """A future that fails with `error` without dispatching anything."""
        future = cls.__new__(cls)
        future._init_ready((None, error))
        return future

    def _init_ready(self, outcome: tuple) -> None:
        self._dispatcher = None
        self._credentials_provider = None
        self._request = None
        self._response_handler = None
        self._error_mapper = None
        self._timeout = None
        self._cancelled = False
        self._started = False
        self._done = False
        self._ready = outcome

    @property
    def request(self) -> Optional[SignedRequest]:
        return self._request

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def set_timeout(self, seconds: float) -> None:
        """Bound the sign-and-dispatch phase. Only effective before the first await."""
        if seconds <= 0:
            raise ValueError("Timeout must be positive")
        self._timeout = seconds

    def with_timeout(self, seconds: float) -> "ServiceFuture[T]":
        self.set_timeout(seconds)
        return self

    def clear_timeout(self) -> None:
        self._timeout = None

    def cancel(self) -> bool:
        """Prevent further progress. Returns False if already finished."""
        if self._done:
            return False
        self._cancelled = True
        return True

    def sync(self, context: ExecutionContext) -> T:
        """Blocking adapter: resolve on `context` and return the value or raise."""
        return context.run(self)

    def __await__(self):
        return self._resolve().__await__()

    async def _resolve(self, executor: Optional[ThreadPoolExecutor] = None) -> T:
        if self._cancelled:
            raise asyncio.CancelledError()
        if self._started:
            raise RuntimeError("ServiceFuture can only be resolved once")
        self._started = True
        try:
            return await self._run_phases(executor)
        finally:
            self._done = True

    async def _run_phases(self, executor: Optional[ThreadPoolExecutor]) -> T:
        if self._ready is not None:
            value, error = self._ready
            if error is not None:
                raise error
            return value

        loop = asyncio.get_running_loop()
        dispatch = loop.run_in_executor(executor, self._sign_and_dispatch)
        try:
            if self._timeout is None:
                response = await dispatch
            else:
                response = await asyncio.wait_for(dispatch, self._timeout)
        except asyncio.TimeoutError as e:
            error = HttpDispatchError(
                f"Request timed out after {self._timeout} seconds: {self._request!r}"
            )
            raise self._map_error(error) from e
        except (CredentialsError, HttpDispatchError) as e:
            mapped = self._map_error(e)
            if mapped is e:
                raise
            raise mapped from e

        if self._cancelled:
            raise asyncio.CancelledError()

        logger.debug("Handling %d response for %r", response.status, self._request)
        return self._response_handler(response)

    def _sign_and_dispatch(self) -> HttpResponse:
        credentials = self._credentials_provider.credentials()
        self._request.sign(credentials)
        return self._dispatcher.dispatch(self._request, timeout=self._timeout)

    def _map_error(self, error: Exception) -> Exception:
        if self._error_mapper is None:
            return error
        return self._error_mapper(error)
