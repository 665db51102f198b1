"""
Gemini chat model boundary.

Builds the ChatGoogleGenerativeAI client and normalizes its responses to
plain text.

Dependencies: langchain_core, langchain_google_genai
System role: Text generation for query rewriting and answer synthesis
"""

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from docqa.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


def create_chat_model(settings: LLMSettings) -> BaseChatModel:
    """
    Create the Gemini chat model.

    Args:
        settings: LLM settings

    Returns:
        BaseChatModel: Configured ChatGoogleGenerativeAI instance
    """
    api_key = settings.google_api_key.get_secret_value() or None
    logger.info(
        f"{__name__}:create_chat_model - model={settings.chat_model}, "
        f"temperature={settings.temperature}"
    )
    return ChatGoogleGenerativeAI(
        model=settings.chat_model,
        temperature=settings.temperature,
        google_api_key=api_key,
    )


def message_text(message: BaseMessage | Any) -> str:
    """
    Extract text from a model response.

    Gemini may return content as a list of parts (strings or dicts with a
    "text" key) instead of a plain string.
    """
    content = getattr(message, "content", message)
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content is not None else ""
