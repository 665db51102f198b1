"""
Answer synthesizer.

Builds the grounded-answer prompt from ranked passages and makes exactly one
LLM call per question. Never raises: LLM failures become a fixed error
sentence so one failing question cannot abort a batch.

Dependencies: langchain_core, docqa.boundary.llm
System role: Final stage of the read path
"""

import asyncio
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from docqa.boundary.llm.chat_model import message_text
from docqa.core.exceptions import SynthesisError
from docqa.core.rag_query.prompts import (
    ANSWER_PROMPT,
    ANSWER_PROMPT_NAME,
    ERROR_ANSWER,
    NOT_FOUND_ANSWER,
    SOURCE_SEPARATOR,
    get_prompt,
)
from docqa.core.rag_query.schemas import AnswerStatus, QuestionAnswerResult, RetrievedPassage

logger = logging.getLogger(__name__)


def build_context(passages: list[RetrievedPassage]) -> str:
    """Enumerate passages as "Source N" blocks in rank order."""
    ordered = sorted(passages, key=lambda passage: passage.rank)
    return SOURCE_SEPARATOR.join(
        f"Source {index}:\n{passage.text}" for index, passage in enumerate(ordered, start=1)
    )


class AnswerSynthesizer:
    """Generate grounded answers from retrieved passages."""

    def __init__(
        self,
        model: BaseChatModel,
        timeout_seconds: float = 60.0,
        use_prompt_registry: bool = False,
        prompt_label: str | None = None,
    ) -> None:
        self._model = model
        self._timeout = timeout_seconds
        self._prompt = get_prompt(
            ANSWER_PROMPT_NAME, ANSWER_PROMPT, use_prompt_registry, prompt_label
        )

    async def _generate(self, question: str, context: str, history: list[BaseMessage]) -> str:
        try:
            messages = self._prompt.format_messages(
                question=question,
                context=context,
                chat_history=history,
            )
            response = await asyncio.wait_for(self._model.ainvoke(messages), timeout=self._timeout)
        except Exception as e:
            raise SynthesisError(
                "LLM call failed",
                {"error": str(e), "error_type": type(e).__name__},
            ) from e
        return message_text(response).strip()

    async def synthesize(
        self,
        question: str,
        passages: list[RetrievedPassage],
        history: list[BaseMessage] | None = None,
    ) -> QuestionAnswerResult:
        """
        Answer a question from retrieved passages.

        Args:
            question: Question to answer
            passages: Ranked passages from the retriever
            history: Optional conversation messages (chat variant)

        Returns:
            QuestionAnswerResult: Answer, or the not-found/error sentence
        """
        if not passages:
            logger.info(f"{__name__}:synthesize - No passages, skipping LLM call")
            return QuestionAnswerResult(
                question=question,
                answer=NOT_FOUND_ANSWER,
                status=AnswerStatus.NOT_FOUND,
            )

        excerpts = [passage.text for passage in passages]
        try:
            answer = await self._generate(question, build_context(passages), history or [])
        except SynthesisError as e:
            logger.error(f"{__name__}:synthesize - {e}", extra={"question": question[:80]})
            return QuestionAnswerResult(
                question=question,
                answer=ERROR_ANSWER,
                excerpts=excerpts,
                status=AnswerStatus.FAILED,
            )

        if not answer or answer == NOT_FOUND_ANSWER:
            return QuestionAnswerResult(
                question=question,
                answer=NOT_FOUND_ANSWER,
                excerpts=excerpts,
                status=AnswerStatus.NOT_FOUND,
            )

        return QuestionAnswerResult(question=question, answer=answer, excerpts=excerpts)
