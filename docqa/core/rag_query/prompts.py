"""
Prompt templates for the read path.

Answer prompt: grounded answering over "Source N" context blocks with short
quotes as proof and a fixed refusal sentence. Rewrite prompt: turns a
follow-up question into a standalone one using the conversation history.
Both can be overridden by versioned prompts from Langfuse.

Dependencies: langchain_core.prompts, docqa.observability.prompt_registry
System role: Prompt templates for query rewriting and answer synthesis
"""

import logging

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from docqa.observability.prompt_registry import PromptRegistry

logger = logging.getLogger(__name__)

ANSWER_PROMPT_NAME = "docqa-answer"
REWRITE_PROMPT_NAME = "docqa-rewrite"

NOT_FOUND_ANSWER = "I could not find the answer in the provided document."
ERROR_ANSWER = "An error occurred while processing this question."
SOURCE_SEPARATOR = "\n\n---\n\n"

ANSWER_SYSTEM_PROMPT = f"""You are an intelligent and reliable assistant.

Use ONLY the context provided below to answer the user's question clearly and accurately.

Your response must:
- Answer the question based on the content.
- Include very small references or quotes from the context as evidence ("proof").
- If the answer cannot be found in the context, reply exactly:
"{NOT_FOUND_ANSWER}\""""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ANSWER_SYSTEM_PROMPT),
    MessagesPlaceholder("chat_history", optional=True),
    ("human", """Question: {question}

Context:
{context}"""),
])

REWRITE_SYSTEM_PROMPT = """Given the conversation so far, rewrite the user's latest question as a
standalone question that can be understood without the conversation.
Resolve pronouns and references using earlier turns. Do not answer the question.
Reply with the rewritten question only."""

REWRITE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", REWRITE_SYSTEM_PROMPT),
    MessagesPlaceholder("chat_history"),
])


def get_prompt(
    name: str,
    local: ChatPromptTemplate,
    use_registry: bool = False,
    label: str | None = None,
) -> ChatPromptTemplate:
    """
    Resolve a prompt template, preferring a registry version when enabled.

    Args:
        name: Registry prompt name
        local: Local template used when the registry has nothing
        use_registry: Whether to consult Langfuse
        label: Optional label filter when using registry

    Returns:
        ChatPromptTemplate: Registry template or the local one
    """
    if use_registry:
        registry = PromptRegistry()
        if registry.is_enabled:
            prompt = registry.get_langchain_prompt(name, label=label)
            if prompt is not None:
                supplied = set(local.input_variables) | set(local.optional_variables)
                unknown = set(prompt.input_variables) - supplied
                if unknown:
                    logger.warning(
                        "Registry prompt has unknown variables, using local template: name=%s variables=%s",
                        name,
                        sorted(unknown),
                    )
                    return local
                logger.debug("Using prompt from registry: name=%s", name)
                return prompt
            logger.debug("Prompt not found in registry, using local template: name=%s", name)
    return local
