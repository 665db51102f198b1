"""
LLM boundary layer.

- EmbeddingService: text-to-vector calls
- create_chat_model / message_text: Gemini chat client and response text

Dependencies: langchain_google_genai
System role: Model adapters for ingestion and question answering
"""

from docqa.boundary.llm.chat_model import create_chat_model, message_text
from docqa.boundary.llm.embeddings import EmbeddingService

__all__ = ["EmbeddingService", "create_chat_model", "message_text"]
