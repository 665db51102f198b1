"""
Conversational query rewriter.

Turns a follow-up question into a standalone query. The question is added to
the history only for the duration of the LLM call; the history is left as it
was found whether the call succeeds or fails.

Dependencies: langchain_core, docqa.boundary.llm
System role: First stage of the chat read path
"""

import asyncio
import logging

from langchain_core.language_models import BaseChatModel

from docqa.boundary.llm.chat_model import message_text
from docqa.core.conversation_store import ConversationHistory
from docqa.core.exceptions import RewriteError
from docqa.core.rag_query.prompts import REWRITE_PROMPT, REWRITE_PROMPT_NAME, get_prompt

logger = logging.getLogger(__name__)


class QueryRewriter:
    """Rewrite follow-up questions into standalone queries."""

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
            REWRITE_PROMPT_NAME, REWRITE_PROMPT, use_prompt_registry, prompt_label
        )

    async def rewrite(self, history: ConversationHistory, question: str) -> str:
        """
        Rewrite a question using the conversation history.

        Args:
            history: Session history (not modified on return)
            question: New user question

        Returns:
            str: Standalone query text

        Raises:
            RewriteError: LLM failure, timeout or empty output
        """
        with history.speculative_turn(question):
            try:
                messages = self._prompt.format_messages(chat_history=history.as_messages())
                response = await asyncio.wait_for(self._model.ainvoke(messages), timeout=self._timeout)
            except Exception as e:
                logger.warning(f"{__name__}:rewrite - {type(e).__name__}: {e}")
                raise RewriteError(
                    "Failed to rewrite question",
                    {"error": str(e), "error_type": type(e).__name__},
                ) from e

        rewritten = message_text(response).strip()
        if not rewritten:
            raise RewriteError("Rewrite returned empty output")

        logger.debug(f"{__name__}:rewrite - '{question[:80]}' -> '{rewritten[:80]}'")
        return rewritten
