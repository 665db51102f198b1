"""
Q&A API endpoint.

Routes: POST /hackrx/run

The bearer token is verified as a dependency, before the body is read. The
body is then read by hand so that one route serves both the batch variant
({documents, questions}) and the chat variant ({question}).

Dependencies: docqa.application.services, docqa.models
System role: Q&A HTTP API
"""

import json
import logging

from fastapi import APIRouter, Depends, Header, Query, Request

from docqa.api.deps import get_chat_service, get_qa_service, verify_bearer_token
from docqa.application.services import ChatService, QAService
from docqa.core.conversation_store import DEFAULT_SESSION_ID
from docqa.core.exceptions import InvalidRequestError
from docqa.models.hackrx import (
    BATCH_REQUEST_ERROR,
    AnswerFormat,
    BatchRunResponse,
    ChatRunRequest,
    ChatRunResponse,
    ErrorResponse,
    parse_run_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hackrx", tags=["hackrx"])


@router.post(
    "/run",
    response_model=BatchRunResponse | ChatRunResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    dependencies=[Depends(verify_bearer_token)],
)
async def run(
    request: Request,
    answer_format: AnswerFormat = Query(default="list"),
    session_id: str = Header(default=DEFAULT_SESSION_ID, alias="X-Session-ID"),
    qa_service: QAService = Depends(get_qa_service),
    chat_service: ChatService = Depends(get_chat_service),
) -> BatchRunResponse | ChatRunResponse:
    """
    Answer questions about a document, or one chat message.

    Args:
        request: Raw request (body parsed here, after authentication)
        answer_format: "list" (default) or "keyed" answers for batch requests
        session_id: Conversation identifier for chat requests
        qa_service: Injected QAService
        chat_service: Injected ChatService

    Returns:
        BatchRunResponse | ChatRunResponse: Answers

    Raises:
        InvalidRequestError: Body malformed or fields missing (400)
        UnsupportedFormatError: Document extension not allowed (415)
        AcquisitionError: Document could not be fetched or parsed (502)
        IndexingError: Document could not be indexed (502)
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestError(BATCH_REQUEST_ERROR, field="body") from e

    payload = parse_run_request(body)

    if isinstance(payload, ChatRunRequest):
        result = await chat_service.ask(session_id or DEFAULT_SESSION_ID, payload.question)
        return ChatRunResponse(answer=result.answer)

    logger.info(
        "Batch run request received",
        extra={"question_count": len(payload.questions)},
    )
    results = await qa_service.run(payload.documents, payload.questions)

    if answer_format == "keyed":
        return BatchRunResponse(answers={result.question: result.answer for result in results})
    return BatchRunResponse(answers=[result.answer for result in results])
