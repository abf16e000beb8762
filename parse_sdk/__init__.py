"""
Parse SDK
---------
Server-side client for the Parse REST API: objects, users and ACLs.

Usage:
    from parse_sdk import Client, Credentials, ObjectClient, class_url

    client = Client(Credentials(application_id="...", rest_api_key="..."))
    scores = ObjectClient(client, class_url("GameScore"))
    created = scores.post({"score": 1337})
"""

from .api import (
    Client, ClientConfig, Credentials, HttpClient, Request, ObjectClient,
    DEFAULT_BASE_URL, class_url, users_url,
)
from .core import (
    ParseSDKError, NoURLError, URLIncludesQueryError, APIError, InternalError,
    RedactedError, ErrorCategory, Object, User, AuthData, ACL, Permissions,
    PUBLIC_PERMISSION_KEY,
)
from .infra.config import (
    ConfigManager, create_client, load_credentials, load_client_config,
    add_credentials_arguments, credentials_from_args,
)
from .infra.logging import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "Credentials",
    "HttpClient",
    "Request",
    "ObjectClient",
    "DEFAULT_BASE_URL",
    "class_url",
    "users_url",
    "ParseSDKError",
    "NoURLError",
    "URLIncludesQueryError",
    "APIError",
    "InternalError",
    "RedactedError",
    "ErrorCategory",
    "Object",
    "User",
    "AuthData",
    "ACL",
    "Permissions",
    "PUBLIC_PERMISSION_KEY",
    "ConfigManager",
    "create_client",
    "load_credentials",
    "load_client_config",
    "add_credentials_arguments",
    "credentials_from_args",
    "configure_logging",
    "get_logger",
]
