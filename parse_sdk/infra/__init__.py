# Infrastructure module - Logging and configuration loading
# Config helpers live in parse_sdk.infra.config (it depends on the api layer)

from .logging import (
    get_logger, configure_logging, RequestContext, RequestIdFilter,
    JSONFormatter, get_request_id, generate_request_id,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "RequestContext",
    "RequestIdFilter",
    "JSONFormatter",
    "get_request_id",
    "generate_request_id",
]
