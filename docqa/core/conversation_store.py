"""
Conversation history store.

Holds chat turns in process memory, keyed by an explicit session id. A chat
turn runs while holding the session lock so concurrent requests on the same
session cannot interleave their history edits.

Dependencies: asyncio, langchain_core.messages, pydantic
System role: Multi-turn state for the chat variant
"""

import asyncio
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SESSION_ID = "default"


class ConversationTurn(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = Field(description="Who produced the text")
    text: str = Field(description="Message text")


class ConversationHistory:
    """Ordered turns of one session, bounded to the most recent max_turns."""

    def __init__(self, max_turns: int = 20) -> None:
        self._max_turns = max_turns
        self._turns: list[ConversationTurn] = []

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def append(self, role: Literal["user", "model"], text: str) -> ConversationTurn:
        """Append a turn, dropping the oldest turns beyond the bound."""
        turn = ConversationTurn(role=role, text=text)
        self._turns.append(turn)
        if len(self._turns) > self._max_turns:
            del self._turns[: len(self._turns) - self._max_turns]
        return turn

    @contextmanager
    def speculative_turn(self, text: str) -> Iterator[ConversationTurn]:
        """
        Temporarily append a user turn, removing it on exit.

        The bound is not applied, so no older turn is dropped while the
        speculative turn is present.
        """
        turn = ConversationTurn(role="user", text=text)
        self._turns.append(turn)
        try:
            yield turn
        finally:
            for index in range(len(self._turns) - 1, -1, -1):
                if self._turns[index] is turn:
                    del self._turns[index]
                    break

    def as_messages(self) -> list[BaseMessage]:
        """Convert turns to LangChain messages (user -> human, model -> ai)."""
        return [
            HumanMessage(content=turn.text) if turn.role == "user" else AIMessage(content=turn.text)
            for turn in self._turns
        ]

    def __len__(self) -> int:
        return len(self._turns)


class ConversationStore:
    """Session id -> ConversationHistory, with one lock per session."""

    def __init__(self, max_turns: int = 20) -> None:
        self._max_turns = max_turns
        self._histories: dict[str, ConversationHistory] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @asynccontextmanager
    async def session(self, session_id: str = DEFAULT_SESSION_ID) -> AsyncIterator[ConversationHistory]:
        """
        Lock a session and yield its history.

        Args:
            session_id: Explicit conversation identifier

        Yields:
            ConversationHistory: Mutable history owned by the caller until exit
        """
        lock = self._locks.setdefault(session_id, asyncio.Lock())
        async with lock:
            history = self._histories.setdefault(
                session_id, ConversationHistory(max_turns=self._max_turns)
            )
            yield history

    def get(self, session_id: str) -> ConversationHistory | None:
        return self._histories.get(session_id)

    def clear(self, session_id: str | None = None) -> None:
        """Drop one session's history, or all sessions when None."""
        if session_id is None:
            self._histories.clear()
            self._locks.clear()
        else:
            self._histories.pop(session_id, None)
