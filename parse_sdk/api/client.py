"""
Parse API Client
----------------
Turns logical requests into authenticated HTTP calls and maps responses
to decoded values or typed errors.

Rules:
- Only the application id and REST API key go out as headers
- The master and JavaScript keys are kept for error redaction
- No retries; every failure is raised to the caller
"""

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING, Any, Optional, Protocol, Sequence, Tuple, Type, TypeVar, Union, overload,
)

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic_core import to_json

from ..core.errors import (
    APIError, InternalError, NoURLError, ParseSDKError, RedactedError,
    URLIncludesQueryError, redact,
)
from ..infra.logging import RequestContext, get_logger

if TYPE_CHECKING:
    from .objects import ObjectClient

T = TypeVar("T")

# The default base URL for the API.
DEFAULT_BASE_URL = "https://api.parse.com/1/"

APPLICATION_ID_HEADER = "X-Parse-Application-Id"
REST_API_KEY_HEADER = "X-Parse-REST-API-Key"

USER_AGENT = "parse-sdk-python/0.1.0"


@dataclass(frozen=True)
class Credentials:
    """Credentials to access an application."""
    application_id: str = ""
    javascript_key: str = field(default="", repr=False)
    master_key: str = field(default="", repr=False)
    rest_api_key: str = field(default="", repr=False)


@dataclass
class ClientConfig:
    """Configuration for a Parse client."""
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    redact: bool = False  # Redact secret keys from rendered errors
    user_agent: str = USER_AGENT


class HttpClient(Protocol):
    """The underlying HTTP client. httpx.Client satisfies it."""

    def send(self, request: httpx.Request) -> httpx.Response:
        ...


class _ErrorPayload(BaseModel):
    model_config = ConfigDict(strict=True)

    error: Optional[str] = None
    code: Optional[int] = None


@dataclass
class Request:
    """A logical API request. The URL must not carry a query string."""
    method: str
    url: Union[str, httpx.URL, None] = None
    params: Sequence[Tuple[str, Any]] = field(default_factory=list)
    body: Any = None

    def to_http_request(self, client: "Client") -> httpx.Request:
        """Make an httpx.Request out of this Request for the given Client."""
        if self.url is None or not str(self.url):
            raise NoURLError()

        try:
            url = httpx.URL(self.url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InternalError(e, url=self.url, client=client) from e

        if url.query:
            raise InternalError(URLIncludesQueryError(), url=url, client=client)

        if self.params:
            try:
                query = make_query_params(self.params)
            except TypeError as e:
                raise InternalError(e, url=url, client=client) from e
            url = url.copy_with(params=query)

        headers = {
            APPLICATION_ID_HEADER: client.credentials.application_id,
            REST_API_KEY_HEADER: client.credentials.rest_api_key,
            "User-Agent": client.config.user_agent,
        }

        if self.body is None:
            return httpx.Request(self.method, url, headers=headers)

        # Parse requires a Content-Length, so the body is buffered up front.
        try:
            content = encode_body(self.body)
        except (TypeError, ValueError) as e:
            partial = httpx.Request(self.method, url, headers=headers)
            raise InternalError(e, url=url, request=partial, client=client) from e

        headers["Content-Type"] = "application/json"
        headers["Content-Length"] = str(len(content))
        return httpx.Request(self.method, url, headers=headers, content=content)


_PARAM_TYPES = (str, int, float, bool, type(None))


def make_query_params(params: Sequence[Tuple[str, Any]]) -> httpx.QueryParams:
    """
    Encode ordered (key, value) pairs as query params.

    Values must be scalars; booleans become "true"/"false" and None an
    empty value. Repeated keys are grouped at the first key's position.
    """
    for key, value in params:
        if not isinstance(value, _PARAM_TYPES):
            raise TypeError(
                f"unsupported value for query param {key!r}: {type(value).__name__}"
            )
    return httpx.QueryParams(list(params))


def encode_body(value: Any) -> bytes:
    """
    JSON-encode a request body, omitting absent model fields.

    Models may be nested anywhere in the value; datetimes become ISO 8601.
    """
    return to_json(value, by_alias=True, exclude_none=True)


class Client:
    """
    Parse API client.

    One Client is shared across calls; it holds no per-call state.
    When no http_client is given, an httpx.Client is created and owned.
    """

    def __init__(
        self,
        credentials: Credentials,
        http_client: Optional[HttpClient] = None,
        redact: Optional[bool] = None,
        config: Optional[ClientConfig] = None,
    ):
        self.credentials = credentials
        self.config = config or ClientConfig()
        self.redact = self.config.redact if redact is None else redact
        self._owns_http_client = http_client is None
        self.http_client: HttpClient = http_client or httpx.Client(
            timeout=self.config.timeout_seconds
        )
        self._logger = get_logger("api.client")

    def close(self) -> None:
        """Close the HTTP client if this Client created it."""
        if self._owns_http_client:
            self.http_client.close()  # type: ignore[attr-defined]

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Client(credentials={self.credentials!r}, redact={self.redact})"

    @overload
    def do(self, request: Request, result_type: None = None) -> None: ...

    @overload
    def do(self, request: Request, result_type: Type[T]) -> T: ...

    def do(self, request, result_type=None):
        """
        Perform a Parse API call.

        Responses in the 2xx or 3xx range are decoded into result_type and
        returned (or discarded when result_type is None). Anything else
        raises APIError. The request body is sent as JSON.
        """
        with RequestContext():
            try:
                http_request = request.to_http_request(self)
                return self.transport(http_request, result_type)
            except ParseSDKError as e:
                self._logger.warning(
                    f"Parse call failed: {e}",
                    extra={"error_category": e.category.name},
                )
                raise

    def transport(self, request: httpx.Request, result_type: Optional[Type[T]] = None) -> Optional[T]:
        """Send the request and decode the JSON response into result_type."""
        self._logger.debug(
            f"{request.method} {redact(self, str(request.url))}",
            extra={"method": request.method},
        )

        try:
            response = self.http_client.send(request)
        except Exception as e:
            # A raw cause in the traceback could carry keys.
            raise RedactedError(e, client=self) from (None if self.redact else e)

        try:
            if response.status_code > 399 or response.status_code < 200:
                self._raise_api_error(request, response)

            try:
                body = response.read()
            except httpx.HTTPError as e:
                raise InternalError(e, request=request, response=response, client=self) from e

            if result_type is None:
                return None

            try:
                return decode_json(body, result_type)
            except (ValueError, ValidationError) as e:
                raise InternalError(
                    e, request=request, response=response, body=body, client=self
                ) from e
        finally:
            response.close()

    def _raise_api_error(self, request: httpx.Request, response: httpx.Response) -> None:
        try:
            body = response.read()
        except httpx.HTTPError as e:
            raise InternalError(e, request=request, response=response, client=self) from e

        try:
            payload = _ErrorPayload.model_validate_json(body)
        except ValidationError as e:
            raise InternalError(
                e, request=request, response=response, body=body, client=self
            ) from e

        raise APIError(
            request,
            response,
            message=payload.error,
            code=payload.code,
            body=body,
            client=self,
        )

    def objects(self, class_name: str, base_url: Optional[str] = None) -> "ObjectClient":
        """Accessor for objects of the given class."""
        from .objects import ObjectClient, class_url
        return ObjectClient(self, class_url(class_name, base_url or self.config.base_url))

    def users(self, base_url: Optional[str] = None) -> "ObjectClient":
        """Accessor for the built-in users collection."""
        from .objects import ObjectClient, users_url
        return ObjectClient(self, users_url(base_url or self.config.base_url))


def decode_json(body: bytes, result_type: Type[T]) -> T:
    """Decode a JSON body into a pydantic model or any TypeAdapter-able type."""
    if isinstance(result_type, type) and issubclass(result_type, BaseModel):
        return result_type.model_validate_json(body)
    return TypeAdapter(result_type).validate_json(body)
