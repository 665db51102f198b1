"""FastAPI dependencies."""

from docqa.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_qa_service,
    get_service_cache,
    get_settings_dependency,
    verify_bearer_token,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_qa_service",
    "get_service_cache",
    "get_settings_dependency",
    "verify_bearer_token",
]
