"""Pipeline steps applied around every outbound request.

A step is a plain callable that receives the in-flight value and returns it,
possibly modified:

- request steps: ``RequestDescriptor -> RequestDescriptor``
- response steps: ``ResponseEnvelope -> ResponseEnvelope``
- error steps: ``(TransportError, RequestDescriptor) -> TransportError``

The pipeline applies each list in order. Logging steps are wrapped with
``best_effort`` so a failure while logging never fails the request.
"""

import functools
from collections.abc import Callable
from typing import Concatenate

from loguru import logger

from helperkit.core.constants import (
    AUTHORIZATION_HEADER,
    BEARER_SCHEME,
    CORRELATION_ID_HEADER,
)
from helperkit.core.context import get_correlation_id
from helperkit.core.error_context import sanitize_headers
from helperkit.core.exceptions import TransportError
from helperkit.http.models import RequestDescriptor, ResponseEnvelope
from helperkit.storage.store import KeyValueStore, StorageNamespace

type RequestStep = Callable[[RequestDescriptor], RequestDescriptor]
type ResponseStep = Callable[[ResponseEnvelope], ResponseEnvelope]
type ErrorStep = Callable[[TransportError, RequestDescriptor], TransportError]

HTTP_401_UNAUTHORIZED = 401


def best_effort[T, **P](
    step: Callable[Concatenate[T, P], T],
) -> Callable[Concatenate[T, P], T]:
    """Make a step return its input unchanged if it raises.

    Args:
        step: A step whose failure must not affect the request.

    Returns:
        Callable: The wrapped step.
    """

    @functools.wraps(step)
    def wrapper(subject: T, *args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return step(subject, *args, **kwargs)
        except Exception as e:  # noqa: BLE001 - logging must never fail a request
            logger.trace(f"Step {step.__name__} failed and was skipped: {e}")
            return subject

    return wrapper


def attach_credential(store: KeyValueStore, key: str = "auth") -> RequestStep:
    """Build a step that sends the stored bearer credential.

    The credential is read from the durable namespace on every call, so a
    login or logout takes effect on the next request. When no credential is
    stored the Authorization header is left out entirely.

    Args:
        store: Store holding the credential.
        key: Storage key of the credential.

    Returns:
        RequestStep: The credential step.
    """

    def attach(descriptor: RequestDescriptor) -> RequestDescriptor:
        credential = store.get(StorageNamespace.LOCAL, key)
        if credential is None or credential == "":
            return descriptor
        return descriptor.with_header(
            AUTHORIZATION_HEADER, f"{BEARER_SCHEME} {credential}"
        )

    return attach


def propagate_correlation_id(descriptor: RequestDescriptor) -> RequestDescriptor:
    """Forward the context correlation ID unless the caller set one."""
    correlation_id = get_correlation_id()
    if not correlation_id or descriptor.header(CORRELATION_ID_HEADER) is not None:
        return descriptor
    return descriptor.with_header(CORRELATION_ID_HEADER, correlation_id)


@best_effort
def log_request(descriptor: RequestDescriptor) -> RequestDescriptor:
    logger.info(
        "Request started: {} {}",
        descriptor.method,
        descriptor.url,
        method=descriptor.method,
        url=descriptor.url,
        headers=sanitize_headers(descriptor.headers),
        params=descriptor.params,
    )
    return descriptor


@best_effort
def log_response(response: ResponseEnvelope) -> ResponseEnvelope:
    logger.info(
        "Request completed: {} {} {}",
        response.status,
        response.descriptor.method,
        response.descriptor.url,
        status=response.status,
        method=response.descriptor.method,
        url=response.descriptor.url,
        duration_ms=response.elapsed_ms,
    )
    return response


@best_effort
def log_error(error: TransportError, descriptor: RequestDescriptor) -> TransportError:
    """Record a failed request; a rejected credential also gets a warning."""
    logger.error(
        "Request failed: {} {} {}",
        error.status if error.status is not None else "-",
        descriptor.method,
        descriptor.url,
        status=error.status,
        method=descriptor.method,
        url=descriptor.url,
        error_kind=error.kind.value,
        error_code=error.error_code,
        error_message=error.message,
        fingerprint=error.fingerprint,
    )
    if error.status == HTTP_401_UNAUTHORIZED:
        logger.warning(
            "Unauthorized request; the stored credential was rejected",
            url=descriptor.url,
        )
    return error


def default_request_steps(store: KeyValueStore, credential_key: str) -> list[RequestStep]:
    """Credential, correlation ID, then logging."""
    return [
        attach_credential(store, credential_key),
        propagate_correlation_id,
        log_request,
    ]


def default_response_steps() -> list[ResponseStep]:
    return [log_response]


def default_error_steps() -> list[ErrorStep]:
    return [log_error]
