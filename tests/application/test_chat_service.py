"""
Test suite for ChatService.

Tests the chat turn flow (rewrite, retrieve, synthesize, record) with mocked
rewriter, retriever and synthesizer.

System role: Verification of chat service orchestration layer
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docqa.application.services import ChatService
from docqa.core.conversation_store import ConversationStore
from docqa.core.exceptions import RetrievalError, RewriteError
from docqa.core.rag_query import (
    ERROR_ANSWER,
    AnswerStatus,
    QuestionAnswerResult,
    RetrievedPassage,
)

PASSAGES = [RetrievedPassage(rank=1, text="Cataract surgery has a two year waiting period.", score=0.9)]


@pytest.fixture
def store() -> ConversationStore:
    return ConversationStore(max_turns=20)


@pytest.fixture
def mock_rewriter() -> MagicMock:
    rewriter = MagicMock()
    rewriter.rewrite = AsyncMock(return_value="What is the waiting period for cataract surgery?")
    return rewriter


@pytest.fixture
def mock_retriever() -> MagicMock:
    retriever = MagicMock()
    retriever.retrieve = AsyncMock(return_value=PASSAGES)
    return retriever


@pytest.fixture
def mock_synthesizer() -> MagicMock:
    async def synthesize(question, passages, history=None):
        return QuestionAnswerResult(question=question, answer="Two years.", excerpts=[p.text for p in passages])

    synthesizer = MagicMock()
    synthesizer.synthesize = AsyncMock(side_effect=synthesize)
    return synthesizer


@pytest.fixture
def chat_service(store, mock_rewriter, mock_retriever, mock_synthesizer) -> ChatService:
    return ChatService(store, mock_rewriter, mock_retriever, mock_synthesizer)


class TestAsk:
    @pytest.mark.asyncio
    async def test_turn_recorded_in_history(
        self, chat_service: ChatService, store: ConversationStore, mock_retriever: MagicMock
    ) -> None:
        # Act
        result = await chat_service.ask("s1", "What about cataract?")

        # Assert
        assert result.answer == "Two years."
        assert result.question == "What about cataract?"
        mock_retriever.retrieve.assert_awaited_once_with("What is the waiting period for cataract surgery?")
        assert [(t.role, t.text) for t in store.get("s1").turns] == [
            ("user", "What about cataract?"),
            ("model", "Two years."),
        ]

    @pytest.mark.asyncio
    async def test_history_passed_to_synthesizer(
        self, chat_service: ChatService, mock_synthesizer: MagicMock
    ) -> None:
        await chat_service.ask("s1", "first")
        await chat_service.ask("s1", "second")

        history = mock_synthesizer.synthesize.await_args.args[2]
        assert [m.content for m in history] == ["first", "Two years."]

    @pytest.mark.asyncio
    async def test_rewrite_failure_falls_back_to_question(
        self, chat_service: ChatService, mock_rewriter: MagicMock, mock_retriever: MagicMock
    ) -> None:
        mock_rewriter.rewrite.side_effect = RewriteError("Failed to rewrite question")

        result = await chat_service.ask("s1", "raw question")

        mock_retriever.retrieve.assert_awaited_once_with("raw question")
        assert result.status is AnswerStatus.ANSWERED

    @pytest.mark.asyncio
    async def test_rewrite_failure_raises_without_fallback(
        self, store, mock_rewriter, mock_retriever, mock_synthesizer
    ) -> None:
        mock_rewriter.rewrite.side_effect = RewriteError("Failed to rewrite question")
        service = ChatService(store, mock_rewriter, mock_retriever, mock_synthesizer, fallback_to_original=False)

        with pytest.raises(RewriteError):
            await service.ask("s1", "raw question")

        assert len(store.get("s1")) == 0

    @pytest.mark.asyncio
    async def test_retrieval_failure_not_recorded(
        self, chat_service: ChatService, store: ConversationStore, mock_retriever: MagicMock
    ) -> None:
        mock_retriever.retrieve.side_effect = RetrievalError("down", attempts=2)

        result = await chat_service.ask("s1", "question")

        assert result.answer == ERROR_ANSWER
        assert len(store.get("s1")) == 0

    @pytest.mark.asyncio
    async def test_empty_session_id_uses_default(self, chat_service: ChatService, store: ConversationStore) -> None:
        await chat_service.ask("", "question")

        assert len(store.get("default")) == 2
