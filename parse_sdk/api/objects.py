"""
Object Accessors
----------------
Access relative to a given base URL, by class name or for known
built-ins like users.
"""

from typing import Any, Optional, Type, TypeVar, Union

import httpx

from ..core.errors import InternalError
from ..core.models import Object
from .client import DEFAULT_BASE_URL, Client, Request

T = TypeVar("T")


def _with_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"


def class_url(class_name: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Base URL for objects of a class, e.g. .../1/classes/GameScore/."""
    return f"{_with_trailing_slash(base_url)}classes/{class_name}/"


def users_url(base_url: str = DEFAULT_BASE_URL) -> str:
    """Base URL for the built-in users collection."""
    return f"{_with_trailing_slash(base_url)}users/"


class ObjectClient:
    """A Client bound to one resource collection."""

    def __init__(self, client: Client, base_url: Union[str, httpx.URL] = DEFAULT_BASE_URL):
        self.client = client
        self.base_url = httpx.URL(base_url)

    def __repr__(self) -> str:
        return f"ObjectClient(base_url={str(self.base_url)!r})"

    def _object_url(self, object_id: str) -> httpx.URL:
        try:
            return self.base_url.join(object_id)
        except (httpx.InvalidURL, TypeError) as e:
            raise InternalError(e, url=self.base_url, client=self.client) from e

    def post(self, value: Any) -> Object:
        """Post a new instance with the given initial value."""
        request = Request(method="POST", url=self.base_url, body=value)
        return self.client.do(request, Object)

    def get(self, object_id: str, result_type: Optional[Type[T]] = None) -> Any:
        """Get an existing instance by id, decoded into result_type (Object by default)."""
        request = Request(method="GET", url=self._object_url(object_id))
        return self.client.do(request, result_type or Object)

    def delete(self, object_id: str) -> None:
        """Delete the instance specified by id."""
        request = Request(method="DELETE", url=self._object_url(object_id))
        self.client.do(request)
