"""
Dependency injection container.

Lazily builds and caches the model clients, vector index, shared stores and
services, and exposes them as FastAPI dependencies.

Dependencies: fastapi, docqa.configs, docqa.application, docqa.boundary
System role: DI container for service injection
"""

import hmac
import logging

from fastapi import Depends, Request

from docqa.application.services import ChatService, QAService
from docqa.configs import Settings, get_settings
from docqa.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self.clear()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def embeddings(self):
        """Get cached embedding service."""
        if self._embeddings is None:
            from docqa.boundary.llm.embeddings import EmbeddingService

            self._embeddings = EmbeddingService.from_settings(self.settings.llm)
        return self._embeddings

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from docqa.boundary.vdb.vector_store_factory import get_vector_index

            self._vector_index = get_vector_index(self.settings.vector_store)
        return self._vector_index

    @property
    def chat_model(self):
        """Get cached chat model."""
        if self._chat_model is None:
            from docqa.boundary.llm.chat_model import create_chat_model

            self._chat_model = create_chat_model(self.settings.llm)
        return self._chat_model

    @property
    def ingestion_registry(self):
        if self._ingestion_registry is None:
            from docqa.core.ingestion_registry import IngestionRegistry

            self._ingestion_registry = IngestionRegistry()
        return self._ingestion_registry

    @property
    def conversation_store(self):
        if self._conversation_store is None:
            from docqa.core.conversation_store import ConversationStore

            self._conversation_store = ConversationStore(
                max_turns=self.settings.pipeline.history_max_turns
            )
        return self._conversation_store

    @property
    def document_pipeline(self):
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            from docqa.core.document_processing import DocumentPipeline

            self._document_pipeline = DocumentPipeline(
                embeddings=self.embeddings,
                vector_index=self.vector_index,
                registry=self.ingestion_registry,
                settings=self.settings.pipeline,
                upsert_timeout_seconds=self.settings.vector_store.timeout_seconds,
            )
        return self._document_pipeline

    @property
    def retriever(self):
        if self._retriever is None:
            from docqa.core.rag_query import Retriever
            from docqa.core.retry_policy import RetryPolicy

            self._retriever = Retriever(
                embeddings=self.embeddings,
                vector_index=self.vector_index,
                retry_policy=RetryPolicy.from_settings(self.settings.pipeline),
                top_k=self.settings.vector_store.top_k,
                query_timeout_seconds=self.settings.vector_store.timeout_seconds,
            )
        return self._retriever

    @property
    def synthesizer(self):
        if self._synthesizer is None:
            from docqa.core.rag_query import AnswerSynthesizer

            observability = self.settings.observability
            self._synthesizer = AnswerSynthesizer(
                model=self.chat_model,
                timeout_seconds=self.settings.llm.timeout_seconds,
                use_prompt_registry=observability.enable_tracing,
                prompt_label=observability.prompt_label,
            )
        return self._synthesizer

    @property
    def rewriter(self):
        if self._rewriter is None:
            from docqa.core.rag_query import QueryRewriter

            observability = self.settings.observability
            self._rewriter = QueryRewriter(
                model=self.chat_model,
                timeout_seconds=self.settings.llm.timeout_seconds,
                use_prompt_registry=observability.enable_tracing,
                prompt_label=observability.prompt_label,
            )
        return self._rewriter

    @property
    def qa_service(self) -> QAService:
        """Get cached batch Q&A service."""
        if self._qa_service is None:
            self._qa_service = QAService(
                pipeline=self.document_pipeline,
                retriever=self.retriever,
                synthesizer=self.synthesizer,
            )
        return self._qa_service

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            self._chat_service = ChatService(
                store=self.conversation_store,
                rewriter=self.rewriter,
                retriever=self.retriever,
                synthesizer=self.synthesizer,
                fallback_to_original=self.settings.pipeline.rewrite_fallback_to_original,
            )
        return self._chat_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embeddings = None
        self._vector_index = None
        self._chat_model = None
        self._ingestion_registry = None
        self._conversation_store = None
        self._document_pipeline = None
        self._retriever = None
        self._synthesizer = None
        self._rewriter = None
        self._qa_service = None
        self._chat_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    return get_settings()


def get_qa_service() -> QAService:
    return get_service_cache().qa_service


def get_chat_service() -> ChatService:
    return get_service_cache().chat_service


def verify_bearer_token(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Check the shared-secret bearer token.

    Runs as a dependency, before the request body is read.

    Args:
        request: Incoming request
        settings: Application settings

    Raises:
        UnauthorizedError: Header missing or token mismatch
    """
    auth = settings.auth
    if not auth.auth_required:
        return

    expected = auth.team_token.get_secret_value()
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")

    if not expected or scheme != "Bearer" or not hmac.compare_digest(token.encode(), expected.encode()):
        logger.warning(
            f"{__name__}:verify_bearer_token - Rejected request",
            extra={"path": request.url.path, "has_header": bool(header)},
        )
        raise UnauthorizedError()
