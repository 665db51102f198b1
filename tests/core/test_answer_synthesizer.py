"""
Test suite for AnswerSynthesizer.

Tests context layout, the single LLM call per question, and degradation to
the fixed not-found and error sentences.

System role: Verification of grounded answer generation
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from docqa.core.rag_query import (
    ERROR_ANSWER,
    NOT_FOUND_ANSWER,
    AnswerStatus,
    AnswerSynthesizer,
    RetrievedPassage,
    build_context,
)

QUESTION = "What is the grace period for premium payment?"


@pytest.fixture
def passages() -> list[RetrievedPassage]:
    return [
        RetrievedPassage(rank=2, text="Renewal must be requested in writing.", score=0.4),
        RetrievedPassage(rank=1, text="A grace period of thirty days is provided.", score=0.9, page=3),
    ]


class TestBuildContext:
    def test_sources_enumerated_in_rank_order(self, passages: list[RetrievedPassage]) -> None:
        context = build_context(passages)

        assert context == (
            "Source 1:\nA grace period of thirty days is provided."
            "\n\n---\n\n"
            "Source 2:\nRenewal must be requested in writing."
        )


class TestSynthesize:
    @pytest.mark.asyncio
    async def test_answer_is_stripped(
        self, synthesizer: AnswerSynthesizer, mock_chat_model: MagicMock, passages
    ) -> None:
        # Act
        result = await synthesizer.synthesize(QUESTION, passages)

        # Assert
        assert result.answer == "The grace period is 30 days."
        assert result.status is AnswerStatus.ANSWERED
        assert len(result.excerpts) == 2
        mock_chat_model.ainvoke.assert_awaited_once()
        human = mock_chat_model.ainvoke.await_args.args[0][-1]
        assert f"Question: {QUESTION}" in human.content
        assert "Source 1:\nA grace period" in human.content

    @pytest.mark.asyncio
    async def test_no_passages_skips_llm(self, synthesizer: AnswerSynthesizer, mock_chat_model: MagicMock) -> None:
        result = await synthesizer.synthesize(QUESTION, [])

        assert result.answer == NOT_FOUND_ANSWER
        assert result.status is AnswerStatus.NOT_FOUND
        mock_chat_model.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_failure_becomes_error_answer(self, passages) -> None:
        model = MagicMock()
        model.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))

        result = await AnswerSynthesizer(model, timeout_seconds=5.0).synthesize(QUESTION, passages)

        assert result.answer == ERROR_ANSWER
        assert result.status is AnswerStatus.FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("output", ["", "   ", NOT_FOUND_ANSWER])
    async def test_refusal_or_empty_is_not_found(self, passages, output: str) -> None:
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content=output))

        result = await AnswerSynthesizer(model, timeout_seconds=5.0).synthesize(QUESTION, passages)

        assert result.answer == NOT_FOUND_ANSWER
        assert result.status is AnswerStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_history_inserted_before_question(
        self, synthesizer: AnswerSynthesizer, mock_chat_model: MagicMock, passages
    ) -> None:
        history = [HumanMessage(content="earlier question"), AIMessage(content="earlier answer")]

        await synthesizer.synthesize(QUESTION, passages, history=history)

        messages = mock_chat_model.ainvoke.await_args.args[0]
        assert [m.content for m in messages[1:3]] == ["earlier question", "earlier answer"]
