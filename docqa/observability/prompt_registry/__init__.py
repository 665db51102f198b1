"""
Langfuse prompt registry module.

Dependencies: langfuse, langchain_core
System role: Prompt version management and LangChain integration
"""

from docqa.observability.prompt_registry.registry import PromptRegistry

__all__ = ["PromptRegistry"]
