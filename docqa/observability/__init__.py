"""
Observability module.

Provides logging configuration, correlation ID tracking and prompt version
management.
"""

from docqa.observability.logger import configure_logging
from docqa.observability.prompt_registry import PromptRegistry

__all__ = ["PromptRegistry", "configure_logging"]
