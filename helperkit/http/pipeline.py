"""Outbound HTTP request pipeline.

``RequestPipeline`` builds a ``RequestDescriptor`` from per-call options,
passes it through the request steps, hands it to the transport and then runs
either the response steps or the error steps. Each call makes exactly one
attempt and shares no mutable state with other calls.

Failures are never swallowed: after the error steps have seen a
``TransportError`` it is re-raised to the caller.
"""

from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Self

import pydantic
from loguru import logger

from helperkit.core.config import HttpConfig, Settings
from helperkit.core.context import generate_request_id
from helperkit.core.error_context import sanitize_error_context
from helperkit.core.exceptions import (
    ConfigurationError,
    RequestSetupError,
    TransportError,
)
from helperkit.core.types import Headers
from helperkit.http.models import (
    RequestDescriptor,
    RequestOptions,
    ResponseEnvelope,
    merge_headers,
)
from helperkit.http.steps import (
    ErrorStep,
    RequestStep,
    ResponseStep,
    default_error_steps,
    default_request_steps,
    default_response_steps,
)
from helperkit.http.transport import HttpxTransport, Transport
from helperkit.storage.store import KeyValueStore

DEFAULT_HEADERS: Headers = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class RequestPipeline:
    """Request pipeline over a transport.

    Args:
        base_url: Backend base URL the transport resolves relative URLs against.
        transport: Performs the network exchange.
        request_steps: Applied in order to every descriptor before sending.
        response_steps: Applied in order to every successful response.
        error_steps: Applied in order to every failure before it is re-raised.
        default_headers: Headers sent unless a call overrides them.
        timeout: Default per-request timeout in seconds.
        sensitive_fields: Extra field names redacted from logged context.
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        *,
        request_steps: Sequence[RequestStep] = (),
        response_steps: Sequence[ResponseStep] = (),
        error_steps: Sequence[ErrorStep] = (),
        default_headers: Mapping[str, str] | None = None,
        timeout: float = 10.0,
        sensitive_fields: Sequence[str] = (),
    ) -> None:
        self.base_url = base_url
        self.transport = transport
        self.request_steps = list(request_steps)
        self.response_steps = list(response_steps)
        self.error_steps = list(error_steps)
        self.default_headers: Headers = dict(
            DEFAULT_HEADERS if default_headers is None else default_headers
        )
        self.timeout = timeout
        self.sensitive_fields = tuple(sensitive_fields)

    @classmethod
    def configure(
        cls,
        base_url: str | None,
        *,
        store: KeyValueStore,
        http_config: HttpConfig | None = None,
        transport: Transport | None = None,
        sensitive_fields: Sequence[str] = (),
    ) -> Self:
        """Build a pipeline with the default steps.

        Args:
            base_url: Backend base URL; must be non-blank.
            store: Store the credential step reads from.
            http_config: Timeout and credential key; defaults when omitted.
            transport: Transport to use; an ``HttpxTransport`` when omitted.
            sensitive_fields: Extra field names redacted from logged context.

        Returns:
            RequestPipeline: The configured pipeline.

        Raises:
            ConfigurationError: If the base URL is missing or blank.
        """
        if base_url is None or not base_url.strip():
            msg = "Cannot configure request pipeline without a backend URL"
            logger.critical(msg, setting="backend_url")
            raise ConfigurationError(msg, context={"setting": "backend_url"})

        config = http_config or HttpConfig()
        logger.debug(
            "Configuring request pipeline",
            base_url=base_url,
            timeout=config.timeout_seconds,
            sensitive_fields=sensitive_fields,
        )
        return cls(
            base_url,
            transport or HttpxTransport(base_url),
            request_steps=default_request_steps(store, config.credential_key),
            response_steps=default_response_steps(),
            error_steps=default_error_steps(),
            timeout=config.timeout_seconds,
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
        await self.transport.aclose()

    def build(
        self,
        url: str,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ) -> RequestDescriptor:
        """Merge call options over the pipeline defaults.

        Raises:
            RequestSetupError: If the options are invalid.
        """
        try:
            if options is None:
                opts = RequestOptions()
            elif isinstance(options, RequestOptions):
                opts = options
            else:
                opts = RequestOptions.model_validate(options)
        except pydantic.ValidationError as e:
            msg = f"Invalid request options for {url}: {e.error_count()} error(s)"
            raise RequestSetupError(msg, context={"url": url}, cause=e) from e

        return RequestDescriptor(
            url=url,
            method=opts.method,
            headers=merge_headers(self.default_headers, opts.headers),
            params=opts.params,
            body=opts.body,
            timeout=opts.timeout or self.timeout,
            request_id=generate_request_id(),
        )

    async def request(
        self,
        url: str,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """Send one request through the pipeline.

        Args:
            url: Target, relative to the base URL or absolute.
            options: Method, headers, params, body and timeout for this call.

        Returns:
            ResponseEnvelope: The successful response after the response steps.

        Raises:
            TransportError: Any classified failure, after the error steps ran.
        """
        try:
            descriptor = self.build(url, options)
        except RequestSetupError as e:
            logger.error(
                "Request setup failed: {}",
                e.message,
                error_code=e.error_code,
                **sanitize_error_context(e, e.context, self.sensitive_fields),
            )
            raise

        with logger.contextualize(request_id=descriptor.request_id):
            for step in self.request_steps:
                descriptor = step(descriptor)

            try:
                response = await self.transport.send(descriptor)
            except TransportError as exc:
                error = exc
                for error_step in self.error_steps:
                    error = error_step(error, descriptor)
                if error is exc:
                    raise
                raise error from exc

            for response_step in self.response_steps:
                response = response_step(response)
            return response

    async def get(self, url: str, **options: Any) -> ResponseEnvelope:  # noqa: ANN401
        return await self.request(url, {**options, "method": "GET"})

    async def post(self, url: str, **options: Any) -> ResponseEnvelope:  # noqa: ANN401
        return await self.request(url, {**options, "method": "POST"})

    async def put(self, url: str, **options: Any) -> ResponseEnvelope:  # noqa: ANN401
        return await self.request(url, {**options, "method": "PUT"})

    async def patch(self, url: str, **options: Any) -> ResponseEnvelope:  # noqa: ANN401
        return await self.request(url, {**options, "method": "PATCH"})

    async def delete(self, url: str, **options: Any) -> ResponseEnvelope:  # noqa: ANN401
        return await self.request(url, {**options, "method": "DELETE"})


def create_pipeline(
    settings: Settings,
    store: KeyValueStore,
    transport: Transport | None = None,
) -> RequestPipeline:
    """Build the application pipeline from settings.

    Raises:
        ConfigurationError: If no backend URL is configured.
    """
    return RequestPipeline.configure(
        settings.backend_url,
        store=store,
        http_config=settings.http_config,
        transport=transport,
        sensitive_fields=settings.log_config.sensitive_fields,
    )
