"""Async HTTP request pipeline with credential and logging steps."""

from helperkit.http.models import (
    RequestDescriptor,
    RequestOptions,
    ResponseEnvelope,
)
from helperkit.http.pipeline import DEFAULT_HEADERS, RequestPipeline, create_pipeline
from helperkit.http.steps import (
    attach_credential,
    best_effort,
    log_error,
    log_request,
    log_response,
    propagate_correlation_id,
)
from helperkit.http.transport import HttpxTransport, Transport

__all__ = [
    "DEFAULT_HEADERS",
    "HttpxTransport",
    "RequestDescriptor",
    "RequestOptions",
    "RequestPipeline",
    "ResponseEnvelope",
    "Transport",
    "attach_credential",
    "best_effort",
    "create_pipeline",
    "log_error",
    "log_request",
    "log_response",
    "propagate_correlation_id",
]
