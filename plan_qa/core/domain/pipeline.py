"""Request, answer and state models for the retrieval pipeline."""

from dataclasses import dataclass, field
from enum import Enum

from .document import Passage, ScoredPassage


class PipelineStage(Enum):
    """States of a single retrieval request.

    ``IDLE -> LOADING_DOCUMENTS -> SPLITTING -> EMBEDDING -> RANKING ->
    ASSEMBLING -> GENERATING -> DONE``; ``FAILED`` is reachable from any step.
    """

    IDLE = "idle"
    LOADING_DOCUMENTS = "loading_documents"
    SPLITTING = "splitting"
    EMBEDDING = "embedding"
    RANKING = "ranking"
    ASSEMBLING = "assembling"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


class AnswerOutcome(Enum):
    """How a successful request ended.

    Attributes:
        ANSWERED: The language model produced the answer.
        NO_DOCUMENTS: Nothing has been uploaded; fixed answer returned.
        NO_READABLE_TEXT: Documents exist but contain no extractable text.
    """

    ANSWERED = "answered"
    NO_DOCUMENTS = "no_documents"
    NO_READABLE_TEXT = "no_readable_text"


@dataclass(frozen=True)
class RetrievalRequest:
    """A question plus an optional single-document selection.

    Attributes:
        question: The user's question.
        document_id: Restrict retrieval to this stored document; ``None``
            uses every available document.
    """

    question: str
    document_id: str | None = None


@dataclass
class AnswerEnvelope:
    """What the pipeline returns to its caller.

    Attributes:
        answer_text: Generated (or fixed) answer.
        scored_passages: Ranked passages that were sent as context.
        outcome: Whether the model answered or the corpus was empty.
        stages: Pipeline stages visited, in order.
    """

    answer_text: str
    scored_passages: list[ScoredPassage] = field(default_factory=list)
    outcome: AnswerOutcome = AnswerOutcome.ANSWERED
    stages: list[PipelineStage] = field(default_factory=list)

    @property
    def cited_passages(self) -> list[Passage]:
        return [scored.passage for scored in self.scored_passages]
