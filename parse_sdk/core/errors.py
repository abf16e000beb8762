"""
Error Handling Module
---------------------
Typed errors for Parse API calls with redaction-aware rendering.

Three kinds of failure reach the caller:
- Caller-contract violations (bad URL, query already present)
- API errors (the service rejected the request)
- Internal/transport errors (local failure to build, send or decode)

No retries happen here. Every failure is raised to the caller.
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Optional
import re

import httpx

if TYPE_CHECKING:
    from ..api.client import Client


REDACTED_JAVASCRIPT_KEY = "-- REDACTED JAVASCRIPT KEY --"
REDACTED_MASTER_KEY = "-- REDACTED MASTER KEY --"


class ErrorCategory(Enum):
    """Categories of errors for handling decisions."""
    CALLER_CONTRACT = auto()  # Request was malformed, nothing was sent
    API = auto()              # The service reported a failure
    INTERNAL = auto()         # Local build/decode failure
    TRANSPORT = auto()        # Network failure from the HTTP client


def redact(client: Optional["Client"], text: str) -> str:
    """
    Replace known secret key literals in text when the client asks for it.

    Replacement is a single leftmost-first pass. The JavaScript key wins over
    the master key when both match at the same position.
    """
    if client is None or not client.redact:
        return text

    replacements = {}
    credentials = client.credentials
    if credentials.javascript_key:
        replacements.setdefault(credentials.javascript_key, REDACTED_JAVASCRIPT_KEY)
    if credentials.master_key:
        replacements.setdefault(credentials.master_key, REDACTED_MASTER_KEY)

    if not replacements:
        return text

    pattern = re.compile("|".join(re.escape(key) for key in replacements))
    return pattern.sub(lambda match: replacements[match.group(0)], text)


def _status_text(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".rstrip()


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


class ParseSDKError(Exception):
    """Base class for every error raised by this package."""
    category: ErrorCategory = ErrorCategory.INTERNAL


class NoURLError(ParseSDKError, ValueError):
    """A request was made without a target URL."""
    category = ErrorCategory.CALLER_CONTRACT

    def __init__(self, message: str = "no URL provided"):
        super().__init__(message)


class URLIncludesQueryError(ParseSDKError, ValueError):
    """The target URL already had a query string."""
    category = ErrorCategory.CALLER_CONTRACT

    def __init__(self, message: str = "URL cannot include query, use params instead"):
        super().__init__(message)


class APIError(ParseSDKError):
    """
    An error reported by the Parse API.

    message and code come from the response body and may be missing.
    The request is always present; the response carries the status.
    """
    category = ErrorCategory.API

    def __init__(
        self,
        request: httpx.Request,
        response: Optional[httpx.Response] = None,
        message: Optional[str] = None,
        code: Optional[int] = None,
        body: bytes = b"",
        client: Optional["Client"] = None,
    ):
        self.request = request
        self.response = response
        self.message = message
        self.code = code
        self.body = body
        self.client = client
        super().__init__(self.render())

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    def render(self) -> str:
        parts = [f"{self.request.method} request for URL {self.request.url} failed with"]

        if self.code is not None:
            parts.append(f" code {self.code}")
        elif self.response is not None:
            parts.append(f" http status {_status_text(self.response)}")

        parts.append(" and")
        if self.message:
            parts.append(f" message {self.message}")
        elif self.body:
            parts.append(f" body {_body_text(self.body)}")
        else:
            parts.append(" no body")

        return redact(self.client, "".join(parts))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"APIError(code={self.code!r}, message={redact(self.client, repr(self.message))})"


class InternalError(ParseSDKError):
    """
    A local failure while building, sending or decoding a request.

    Carries whatever context was available at the failure point: the URL
    when no wire request exists yet, otherwise the request and possibly
    the response with its captured body.
    """
    category = ErrorCategory.INTERNAL

    def __init__(
        self,
        actual: BaseException,
        url: Optional[object] = None,
        request: Optional[httpx.Request] = None,
        response: Optional[httpx.Response] = None,
        body: bytes = b"",
        client: Optional["Client"] = None,
    ):
        self.actual = actual
        self.url = url
        self.request = request
        self.response = response
        self.body = body
        self.client = client
        super().__init__(self.render())

    def render(self) -> str:
        if self.request is None:
            parts = [f"request for URL {self.url}"]
        else:
            parts = [f"{self.request.method} request for URL {self.request.url}"]

        parts.append(f" failed with error {self.actual}")

        if self.response is not None:
            parts.append(
                f" http status {_status_text(self.response)} ({self.response.status_code}) and"
            )
            if self.body:
                parts.append(f" body {_body_text(self.body)}")
            else:
                parts.append(" no body")

        return redact(self.client, "".join(parts))

    def __str__(self) -> str:
        return self.render()


class RedactedError(ParseSDKError):
    """Wraps a transport failure so its text passes through redaction."""
    category = ErrorCategory.TRANSPORT

    def __init__(self, actual: BaseException, client: Optional["Client"] = None):
        self.actual = actual
        self.client = client
        super().__init__(self.render())

    def render(self) -> str:
        return redact(self.client, str(self.actual))

    def __str__(self) -> str:
        return self.render()
