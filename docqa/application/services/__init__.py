"""Application services orchestrating the core pipeline."""

from docqa.application.services.chat_service import ChatService
from docqa.application.services.qa_service import QAService

__all__ = ["ChatService", "QAService"]
