"""
Chat service for conversational Q&A.

Orchestrates one chat turn: rewrite the follow-up question into a standalone
query, retrieve passages, synthesize an answer with the conversation history,
then record the turn. The session lock is held for the whole turn.

Dependencies: docqa.core.rag_query, docqa.core.conversation_store
System role: Chat service orchestration layer
"""

import logging

from docqa.core.conversation_store import DEFAULT_SESSION_ID, ConversationStore
from docqa.core.exceptions import RetrievalError, RewriteError
from docqa.core.rag_query import (
    AnswerStatus,
    AnswerSynthesizer,
    QueryRewriter,
    QuestionAnswerResult,
    Retriever,
)
from docqa.core.rag_query.prompts import ERROR_ANSWER

logger = logging.getLogger(__name__)


class ChatService:
    """
    Multi-turn Q&A over the shared vector index.

    Coordinates query rewriting, retrieval, synthesis and history updates.
    """

    def __init__(
        self,
        store: ConversationStore,
        rewriter: QueryRewriter,
        retriever: Retriever,
        synthesizer: AnswerSynthesizer,
        fallback_to_original: bool = True,
    ) -> None:
        """
        Initialize chat service.

        Args:
            store: Conversation history per session
            rewriter: Follow-up question rewriter
            retriever: Passage retriever
            synthesizer: Answer synthesizer
            fallback_to_original: Use the raw question when rewriting fails
        """
        self.store = store
        self.rewriter = rewriter
        self.retriever = retriever
        self.synthesizer = synthesizer
        self.fallback_to_original = fallback_to_original

    async def ask(self, session_id: str, question: str) -> QuestionAnswerResult:
        """
        Process one chat message.

        Flow:
        1. Lock the session
        2. Rewrite the question (optionally falling back to the raw question)
        3. Retrieve passages for the rewritten query
        4. Synthesize an answer with the history
        5. Append the user turn and the answer to history

        Args:
            session_id: Conversation identifier
            question: User's message

        Returns:
            QuestionAnswerResult: Answer for the original question

        Raises:
            RewriteError: Rewriting failed and fallback is disabled
        """
        session_id = session_id or DEFAULT_SESSION_ID

        async with self.store.session(session_id) as history:
            try:
                query = await self.rewriter.rewrite(history, question)
            except RewriteError as e:
                if not self.fallback_to_original:
                    raise
                logger.warning(
                    f"{__name__}:ask - Rewrite failed, using original question: {e}",
                    extra={"session_id": session_id},
                )
                query = question

            try:
                passages = await self.retriever.retrieve(query)
            except RetrievalError as e:
                logger.error(f"{__name__}:ask - Retrieval failed: {e}", extra={"session_id": session_id})
                return QuestionAnswerResult(
                    question=question,
                    answer=ERROR_ANSWER,
                    status=AnswerStatus.FAILED,
                )

            result = await self.synthesizer.synthesize(query, passages, history.as_messages())
            result = result.model_copy(update={"question": question})

            if result.status != AnswerStatus.FAILED:
                history.append("user", question)
                history.append("model", result.answer)

            logger.info(
                f"{__name__}:ask - Answered chat turn",
                extra={"session_id": session_id, "status": result.status.value, "turns": len(history)},
            )
            return result
