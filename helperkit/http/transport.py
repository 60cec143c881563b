"""HTTP transports for the request pipeline.

A transport performs the network exchange for one ``RequestDescriptor`` and
classifies every failure into one of the ``TransportError`` subclasses:

- ``RequestSetupError``: the request could not be built or sent at all
- ``RequestTimeoutError``: no response within the descriptor's timeout
- ``NoResponseError``: connection or network failure, a redirect loop or an
  undecodable body
- ``ErrorResponseError``: a response arrived with a non-2xx status

The pipeline depends only on the ``Transport`` protocol, so tests and other
HTTP libraries can supply their own implementation.
"""

import time
from types import TracebackType
from typing import Any, Protocol, Self

import httpx
from loguru import logger

from helperkit.core.constants import MILLISECONDS_PER_SECOND
from helperkit.core.exceptions import (
    ErrorResponseError,
    NoResponseError,
    RequestSetupError,
    RequestTimeoutError,
)
from helperkit.http.models import RequestDescriptor, ResponseEnvelope
from helperkit.transforms.parsing import Parsed, parse_json


class Transport(Protocol):
    """Performs the network exchange for a descriptor."""

    async def send(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        """Send a request and return the successful response.

        Raises:
            TransportError: A classified failure.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


def decode_body(response: httpx.Response) -> Any:  # noqa: ANN401 - decoded JSON or text
    """Decode a response payload: JSON when it parses, text otherwise."""
    if not response.content:
        return None
    result = parse_json(response.content)
    if isinstance(result, Parsed):
        return result.value
    return response.text


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``.

    Args:
        base_url: Base against which relative descriptor URLs resolve.
        client: Optional pre-built client; when given, ``base_url`` is ignored.
        transport: Optional low-level HTTPX transport (e.g. ``MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            follow_redirects=True,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _build(self, descriptor: RequestDescriptor) -> httpx.Request:
        """Translate a descriptor into an HTTPX request.

        Raises:
            RequestSetupError: If the URL or body is unusable.
        """
        try:
            return self._client.build_request(
                descriptor.method,
                descriptor.url,
                headers=descriptor.headers,
                params=descriptor.params,
                json=descriptor.body,
                timeout=descriptor.timeout,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            msg = f"Could not build {descriptor.method} request for {descriptor.url}"
            raise RequestSetupError(
                msg, context={"url": descriptor.url}, cause=e
            ) from e

    async def send(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        """Send a request and classify the outcome.

        Args:
            descriptor: The fully built request.

        Returns:
            ResponseEnvelope: The decoded 2xx response.

        Raises:
            RequestSetupError: The request could not be built or sent.
            RequestTimeoutError: The timeout elapsed.
            NoResponseError: The connection failed, redirects looped or the
                body could not be decoded.
            ErrorResponseError: The server answered with a non-2xx status.
        """
        request = self._build(descriptor)
        context = {"method": descriptor.method, "url": descriptor.url}
        start_time = time.perf_counter()

        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            msg = f"Request timed out after {descriptor.timeout}s"
            raise RequestTimeoutError(msg, context=context, cause=e) from e
        except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            msg = f"Request could not be sent: {e}"
            raise RequestSetupError(msg, context=context, cause=e) from e
        except httpx.TooManyRedirects as e:
            msg = f"Redirect limit exceeded: {e}"
            raise NoResponseError(msg, context=context, cause=e) from e
        except httpx.RequestError as e:
            msg = f"No response received: {e}"
            raise NoResponseError(msg, context=context, cause=e) from e

        elapsed_ms = (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND
        body = decode_body(response)
        headers = dict(response.headers)

        if not response.is_success:
            msg = f"Request failed with status code {response.status_code}"
            raise ErrorResponseError(
                msg,
                status=response.status_code,
                body=body,
                headers=headers,
                context=context,
            )

        logger.trace("Transport received {} bytes", len(response.content))
        return ResponseEnvelope(
            status=response.status_code,
            headers=headers,
            body=body,
            descriptor=descriptor,
            elapsed_ms=round(elapsed_ms, 2),
        )
