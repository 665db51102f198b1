"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic fake embeddings, mocked chat model, in-memory vector
index, fake parser, mock HTTP transport for document downloads
Dependencies: pytest, httpx, langchain_core
System role: Test infrastructure and fixture management
"""

import hashlib
import math
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessage

from docqa.boundary.llm.embeddings import EmbeddingService
from docqa.boundary.vdb.memory_store import InMemoryVectorIndex
from docqa.configs.pipeline import PipelineSettings
from docqa.core.document_processing import DocumentPipeline
from docqa.core.document_processing.tasks import AcquisitionTask
from docqa.core.ingestion_registry import IngestionRegistry
from docqa.core.rag_query import AnswerSynthesizer, Retriever
from docqa.core.retry_policy import RetryPolicy
from docqa.observability.prompt_registry import PromptRegistry

DOC_URL = "https://example.com/files/policy.pdf?sv=2024&sig=abc"
DIMENSIONS = 32


class HashingEmbeddings(Embeddings):
    """Bag-of-words embeddings hashed into a small fixed dimension."""

    def __init__(self) -> None:
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * DIMENSIONS
        for word in text.lower().split():
            bucket = int(hashlib.md5(word.encode()).hexdigest(), 16) % DIMENSIONS
            vector[bucket] += 1.0
        norm = math.sqrt(sum(v * v for v in vector)) or 1.0
        return [v / norm for v in vector]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return self.embed_documents(texts)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


@pytest.fixture(autouse=True)
def reset_prompt_registry() -> None:
    """Keep the registry singleton from leaking between tests."""
    PromptRegistry.reset()
    yield
    PromptRegistry.reset()


@pytest.fixture
def fake_embeddings() -> HashingEmbeddings:
    return HashingEmbeddings()


@pytest.fixture
def embedding_service(fake_embeddings: HashingEmbeddings) -> EmbeddingService:
    return EmbeddingService(fake_embeddings, timeout_seconds=5.0)


@pytest.fixture
def vector_index() -> InMemoryVectorIndex:
    return InMemoryVectorIndex()


@pytest.fixture
def registry() -> IngestionRegistry:
    return IngestionRegistry()


@pytest.fixture
def pipeline_settings() -> PipelineSettings:
    return PipelineSettings(retrieval_backoff_ms=0)


@pytest.fixture
def mock_chat_model() -> MagicMock:
    """Chat model whose ainvoke returns a fixed AIMessage."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="  The grace period is 30 days.  "))
    return model


@pytest.fixture
def sample_pages() -> list[Document]:
    """Parsed pages of a small policy document."""
    return [
        Document(
            page_content="A grace period of thirty days is provided for premium payment. " * 20,
            metadata={"page": 0},
        ),
        Document(
            page_content="The waiting period for pre-existing diseases is 36 months. " * 20,
            metadata={"page": 1},
        ),
    ]


@pytest.fixture
def mock_parser(sample_pages: list[Document]) -> MagicMock:
    parser = MagicMock()
    parser.parse = AsyncMock(return_value=sample_pages)
    return parser


@pytest.fixture
def download_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_transport(download_requests: list[httpx.Request]) -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport answering every GET with the given status and body."""

    def _make(status_code: int = 200, content: bytes = b"%PDF-1.4 fake") -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            download_requests.append(request)
            return httpx.Response(status_code, content=content)

        return httpx.MockTransport(handler)

    return _make


@pytest.fixture
def acquisition_task(make_transport: Callable[..., httpx.MockTransport]) -> AcquisitionTask:
    return AcquisitionTask(timeout_seconds=5.0, transport=make_transport())


@pytest.fixture
def document_pipeline(
    embedding_service: EmbeddingService,
    vector_index: InMemoryVectorIndex,
    registry: IngestionRegistry,
    pipeline_settings: PipelineSettings,
    acquisition_task: AcquisitionTask,
    mock_parser: MagicMock,
) -> DocumentPipeline:
    return DocumentPipeline(
        embeddings=embedding_service,
        vector_index=vector_index,
        registry=registry,
        settings=pipeline_settings,
        acquisition_task=acquisition_task,
        parsing_task=mock_parser,
    )


@pytest.fixture
def retriever(embedding_service: EmbeddingService, vector_index: InMemoryVectorIndex) -> Retriever:
    return Retriever(
        embeddings=embedding_service,
        vector_index=vector_index,
        retry_policy=RetryPolicy(max_attempts=2, backoff_ms=0),
        top_k=10,
        query_timeout_seconds=5.0,
    )


@pytest.fixture
def synthesizer(mock_chat_model: MagicMock) -> AnswerSynthesizer:
    return AnswerSynthesizer(model=mock_chat_model, timeout_seconds=5.0)
