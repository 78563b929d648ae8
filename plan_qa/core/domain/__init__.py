"""Domain models for plan-qa.

- document: StoredDocument, Document, Passage and ScoredPassage
- pipeline: RetrievalRequest, AnswerEnvelope, PipelineStage, AnswerOutcome

All models are re-exported here:

    from plan_qa.core.domain import Passage, ScoredPassage
"""

from .document import Document, Passage, ScoredPassage, StoredDocument
from .pipeline import AnswerEnvelope, AnswerOutcome, PipelineStage, RetrievalRequest

__all__ = [
    # Document models
    "StoredDocument",
    "Document",
    "Passage",
    "ScoredPassage",
    # Pipeline models
    "RetrievalRequest",
    "AnswerEnvelope",
    "AnswerOutcome",
    "PipelineStage",
]
