from .http import (
    ApiClient,
    ApiError,
    ApiValidationError,
    MiddlewareTransport,
    on_session_expired,
    refresh_and_retry,
)
from .page import Debouncer, Notification, ResourcePage
from .resource_client import ResourceClient

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiValidationError",
    "Debouncer",
    "MiddlewareTransport",
    "Notification",
    "ResourceClient",
    "ResourcePage",
    "on_session_expired",
    "refresh_and_retry",
]
