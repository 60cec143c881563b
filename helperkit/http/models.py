"""Request and response models for the HTTP request pipeline.

All models are frozen. Pipeline steps never mutate a descriptor in place;
they return a modified copy, so a descriptor handed to the transport is the
exact value that was logged.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from helperkit.core.types import Headers, QueryParams

type HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def merge_headers(base: Mapping[str, str], overrides: Mapping[str, str]) -> Headers:
    """Merge header mappings, matching names case-insensitively.

    Args:
        base: Headers to start from.
        overrides: Headers that win over ``base``; their spelling is kept.

    Returns:
        Headers: A new merged mapping.
    """
    merged = dict(base)
    for name, value in overrides.items():
        for existing in [k for k in merged if k.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


class RequestOptions(BaseModel):
    """Per-call options merged over the pipeline defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HttpMethod = "GET"
    headers: Headers = Field(default_factory=dict)
    params: QueryParams | None = None
    body: Any = None
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("method", mode="before")
    @classmethod
    def uppercase_method(cls, v: object) -> object:
        """Accept lowercase method names."""
        return v.upper() if isinstance(v, str) else v


class RequestDescriptor(BaseModel):
    """A fully built outbound request.

    Attributes:
        url: Target, relative to the pipeline base URL.
        method: HTTP method.
        headers: Headers sent on the wire.
        params: Optional query parameters.
        body: Optional JSON-serializable body.
        timeout: Timeout in seconds enforced by the transport.
        request_id: Identifier binding together all log records of the call.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    method: HttpMethod
    headers: Headers
    params: QueryParams | None = None
    body: Any = None
    timeout: float = Field(gt=0)
    request_id: str

    def header(self, name: str) -> str | None:
        """Look up a header value case-insensitively."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None

    def with_header(self, name: str, value: str) -> "RequestDescriptor":
        """Return a copy with one header set (replacing any other spelling)."""
        return self.model_copy(
            update={"headers": merge_headers(self.headers, {name: value})}
        )


class ResponseEnvelope(BaseModel):
    """A successful (2xx) response.

    Attributes:
        status: HTTP status code.
        headers: Response headers.
        body: Decoded JSON body, the raw text when it is not JSON, or None
            when the response has no content.
        descriptor: The request that produced this response.
        elapsed_ms: Time spent in the transport, in milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    status: int
    headers: Headers
    body: Any = None
    descriptor: RequestDescriptor
    elapsed_ms: float = 0.0
