"""
Read path: query rewriting, retrieval and answer synthesis.
"""

from docqa.core.rag_query.answer_synthesizer import AnswerSynthesizer, build_context
from docqa.core.rag_query.prompts import ERROR_ANSWER, NOT_FOUND_ANSWER
from docqa.core.rag_query.query_rewriter import QueryRewriter
from docqa.core.rag_query.retriever import Retriever
from docqa.core.rag_query.schemas import AnswerStatus, QuestionAnswerResult, RetrievedPassage

__all__ = [
    "ERROR_ANSWER",
    "NOT_FOUND_ANSWER",
    "AnswerStatus",
    "AnswerSynthesizer",
    "QueryRewriter",
    "QuestionAnswerResult",
    "RetrievedPassage",
    "Retriever",
    "build_context",
]
