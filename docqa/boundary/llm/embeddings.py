"""
Embedding service wrapper.

Wraps any LangChain Embeddings implementation (Gemini by default) with a
per-call deadline. Documents and queries go through the async embedding API.

Dependencies: langchain_core, langchain_google_genai
System role: Text-to-vector boundary for indexing and retrieval
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from docqa.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Deadline-bounded embedding calls over a LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings, timeout_seconds: float = 60.0) -> None:
        self._embeddings = embeddings
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "EmbeddingService":
        """
        Create a Gemini-backed embedding service.

        Args:
            settings: LLM settings carrying the model id and API key

        Returns:
            EmbeddingService: Service using GoogleGenerativeAIEmbeddings
        """
        api_key = settings.google_api_key.get_secret_value() or None
        embeddings = GoogleGenerativeAIEmbeddings(
            model=settings.embedding_model,
            google_api_key=api_key,
        )
        logger.info(
            f"{__name__}:from_settings - Initialized with model={settings.embedding_model}"
        )
        return cls(embeddings, timeout_seconds=settings.timeout_seconds)

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a batch of chunk texts.

        Raises:
            asyncio.TimeoutError: When the call exceeds the deadline
        """
        vectors = await asyncio.wait_for(
            self._embeddings.aembed_documents(texts), timeout=self._timeout
        )
        if len(vectors) != len(texts):
            raise ValueError(
                f"Embedding model returned {len(vectors)} vectors for {len(texts)} texts"
            )
        return vectors

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single question."""
        return await asyncio.wait_for(self._embeddings.aembed_query(text), timeout=self._timeout)
