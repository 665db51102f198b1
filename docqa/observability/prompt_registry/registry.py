"""
Langfuse prompt registry for versioned prompt overrides.

Singleton registry that fetches prompts from Langfuse and converts them to
LangChain templates. Disabled unless tracing is enabled and keys are set.

Dependencies: langfuse, langchain_core, docqa.configs
System role: Prompt version retrieval
"""

import logging
from typing import TYPE_CHECKING

from langchain_core.prompts import ChatPromptTemplate
from langfuse import Langfuse

from docqa.configs import get_settings

if TYPE_CHECKING:
    from langfuse.model import ChatPromptClient

logger = logging.getLogger(__name__)


class PromptRegistry:
    """
    Singleton registry for Langfuse prompt retrieval.

    Attributes:
        _instance: Singleton instance
        _client: Langfuse client
        _enabled: Whether Langfuse integration is enabled
    """

    _instance: "PromptRegistry | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "PromptRegistry":
        """Singleton pattern for registry instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        """Initialize Langfuse client with configuration."""
        obs_settings = get_settings().observability

        if not obs_settings.enable_tracing:
            logger.info("Langfuse tracing disabled, prompt registry inactive")
            self._enabled = False
            return

        if not obs_settings.public_key or not obs_settings.secret_key:
            logger.warning("Langfuse keys not configured, prompt registry inactive")
            self._enabled = False
            return

        self._client = Langfuse(
            public_key=obs_settings.public_key,
            secret_key=obs_settings.secret_key,
            host=obs_settings.host,
        )
        self._enabled = True
        logger.info("Prompt registry initialized: host=%s", obs_settings.host)

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next call re-reads settings."""
        cls._instance = None
        cls._client = None
        cls._enabled = False

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def get_prompt(self, name: str, label: str | None = None) -> "ChatPromptClient | None":
        """
        Fetch a chat prompt from Langfuse.

        Args:
            name: Prompt identifier
            label: Optional label filter (e.g., "production")

        Returns:
            ChatPromptClient: Langfuse prompt, or None if disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, cannot fetch: name=%s", name)
            return None

        kwargs: dict = {"name": name, "type": "chat"}
        if label:
            kwargs["label"] = label

        prompt = self._client.get_prompt(**kwargs)
        logger.debug("Fetched prompt: name=%s version=%s", name, getattr(prompt, "version", None))
        return prompt

    def get_langchain_prompt(self, name: str, label: str | None = None) -> ChatPromptTemplate | None:
        """
        Fetch a prompt and convert it to a ChatPromptTemplate.

        Registry errors are logged and reported as "not found" so callers
        fall back to their local template.

        Args:
            name: Prompt identifier
            label: Optional label filter

        Returns:
            ChatPromptTemplate: LangChain template, or None if disabled/unavailable
        """
        try:
            prompt = self.get_prompt(name, label=label)
            if prompt is None:
                return None
            template = ChatPromptTemplate.from_messages(prompt.get_langchain_prompt())
        except Exception as e:
            logger.warning("Prompt fetch failed, using local template: name=%s error=%s", name, e)
            return None

        template.metadata = {"langfuse_prompt": prompt}
        return template
