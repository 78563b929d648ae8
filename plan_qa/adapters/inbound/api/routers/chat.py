"""Question answering endpoint."""

import logging

from fastapi import APIRouter

from .....composition.container import get_llm, get_pipeline
from .....core.domain import AnswerEnvelope, AnswerOutcome, RetrievalRequest
from ..models import AnswerResponse, ErrorResponse, QuestionRequest, SourceInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["chat"])

EXCERPT_LENGTH = 200


def to_response(question: str, envelope: AnswerEnvelope, model_used: str | None) -> AnswerResponse:
    sources = [
        SourceInfo(
            passage_id=item.passage.id,
            document_id=item.passage.document_id,
            title=item.passage.display_name or item.passage.document_id,
            project_name=item.passage.project_name,
            page=item.passage.page,
            relevance_score=item.score,
            excerpt=item.passage.text[:EXCERPT_LENGTH],
        )
        for item in envelope.scored_passages
    ]
    return AnswerResponse(
        answer=envelope.answer_text,
        question=question,
        outcome=envelope.outcome.value,
        sources=sources,
        model_used=model_used if envelope.outcome is AnswerOutcome.ANSWERED else None,
    )


@router.post(
    "/ask",
    response_model=AnswerResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or empty question"},
        404: {"model": ErrorResponse, "description": "Unknown document id"},
        500: {"model": ErrorResponse, "description": "Missing configuration or upstream failure"},
        504: {"model": ErrorResponse, "description": "Upstream call timed out"},
    },
)
def ask_question(request: QuestionRequest) -> AnswerResponse:
    """Answer a question from the uploaded PDFs.

    Errors propagate to the application's exception handlers, which map
    invalid input to 4xx and configuration or upstream failures to 5xx.
    """
    pipeline = get_pipeline()
    envelope = pipeline.run(
        RetrievalRequest(question=request.question, document_id=request.document_id)
    )
    logger.info(
        "Answered question (outcome=%s, sources=%d)",
        envelope.outcome.value,
        len(envelope.scored_passages),
    )
    return to_response(request.question.strip(), envelope, get_llm().model_name)
