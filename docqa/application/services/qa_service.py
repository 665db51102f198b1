"""
Batch question-answering service.

Orchestrates one /hackrx/run request: ingest the document (skipped when
already indexed), then answer every question concurrently. Ingestion always
completes before any retrieval starts. Answers come back in question order.

Dependencies: docqa.core.document_processing, docqa.core.rag_query
System role: Request orchestration for the batch variant
"""

import asyncio
import logging
from pathlib import Path

from docqa.core.document_processing import DocumentPipeline, IngestionResult
from docqa.core.exceptions import RetrievalError
from docqa.core.rag_query import (
    AnswerStatus,
    AnswerSynthesizer,
    QuestionAnswerResult,
    Retriever,
)
from docqa.core.rag_query.prompts import ERROR_ANSWER

logger = logging.getLogger(__name__)


class QAService:
    """
    Batch Q&A over a single document.

    Coordinates the document pipeline, retriever and synthesizer.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        retriever: Retriever,
        synthesizer: AnswerSynthesizer,
    ) -> None:
        """
        Initialize QA service.

        Args:
            pipeline: Write-path orchestrator
            retriever: Passage retriever
            synthesizer: Answer synthesizer
        """
        self.pipeline = pipeline
        self.retriever = retriever
        self.synthesizer = synthesizer

    async def answer_question(self, question: str, content_hash: str | None = None) -> QuestionAnswerResult:
        """
        Retrieve and synthesize an answer for one question.

        Passages come only from the document with content_hash when given. A
        retrieval failure is isolated to this question and reported with the
        fixed error sentence.
        """
        try:
            passages = await self.retriever.retrieve(question, content_hash=content_hash)
        except RetrievalError as e:
            logger.error(
                f"{__name__}:answer_question - Retrieval failed: {e}",
                extra={"question": question[:80]},
            )
            return QuestionAnswerResult(
                question=question,
                answer=ERROR_ANSWER,
                status=AnswerStatus.FAILED,
            )
        return await self.synthesizer.synthesize(question, passages)

    async def run(self, document_url: str, questions: list[str]) -> list[QuestionAnswerResult]:
        """
        Ingest a document and answer questions about it.

        Flow:
        1. Ingest the document (fatal on failure, skipped on cache hit)
        2. Answer all questions concurrently
        3. Return results in input order

        Args:
            document_url: URL of a PDF or DOCX document
            questions: Questions to answer

        Returns:
            list[QuestionAnswerResult]: One result per question, same order

        Raises:
            UnsupportedFormatError: Document extension not allowed
            AcquisitionError: Document could not be fetched or parsed
            IndexingError: Document could not be indexed
        """
        ingestion = await self.pipeline.ingest_url(document_url)
        logger.info(
            f"{__name__}:run - Answering {len(questions)} questions",
            extra={"content_hash": ingestion.content_hash[:12], "skipped": ingestion.skipped},
        )
        return list(
            await asyncio.gather(
                *(self.answer_question(q, content_hash=ingestion.content_hash) for q in questions)
            )
        )

    async def ingest_upload(self, file_path: str | Path, filename: str) -> IngestionResult:
        """
        Index an uploaded document for later questions.

        Args:
            file_path: Local path of the stored upload (removed afterwards)
            filename: Original upload filename

        Returns:
            IngestionResult: Outcome of the ingestion
        """
        return await self.pipeline.ingest_upload(file_path, filename)
