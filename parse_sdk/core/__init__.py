# Core module - Error taxonomy, redaction, and API data models

from .errors import (
    ParseSDKError, NoURLError, URLIncludesQueryError,
    APIError, InternalError, RedactedError, ErrorCategory, redact,
    REDACTED_JAVASCRIPT_KEY, REDACTED_MASTER_KEY,
)
from .models import (
    ParseModel, Object, User, AuthData, TwitterAuth, FacebookAuth, AnonymousAuth,
    ACL, Permissions, PUBLIC_PERMISSION_KEY, ROLE_KEY_PREFIX,
)

__all__ = [
    # Errors
    "ParseSDKError",
    "NoURLError",
    "URLIncludesQueryError",
    "APIError",
    "InternalError",
    "RedactedError",
    "ErrorCategory",
    "redact",
    "REDACTED_JAVASCRIPT_KEY",
    "REDACTED_MASTER_KEY",
    # Models
    "ParseModel",
    "Object",
    "User",
    "AuthData",
    "TwitterAuth",
    "FacebookAuth",
    "AnonymousAuth",
    "ACL",
    "Permissions",
    "PUBLIC_PERMISSION_KEY",
    "ROLE_KEY_PREFIX",
]
