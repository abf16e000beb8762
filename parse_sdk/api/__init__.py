# API module - Parse REST client
# Request building, dispatch, and per-collection accessors

from .client import (
    Client, ClientConfig, Credentials, HttpClient, Request,
    DEFAULT_BASE_URL, APPLICATION_ID_HEADER, REST_API_KEY_HEADER,
    encode_body, decode_json, make_query_params,
)
from .objects import ObjectClient, class_url, users_url

__all__ = [
    "Client",
    "ClientConfig",
    "Credentials",
    "HttpClient",
    "Request",
    "DEFAULT_BASE_URL",
    "APPLICATION_ID_HEADER",
    "REST_API_KEY_HEADER",
    "encode_body",
    "decode_json",
    "make_query_params",
    "ObjectClient",
    "class_url",
    "users_url",
]
