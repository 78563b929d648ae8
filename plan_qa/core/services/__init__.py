"""Retrieval services: splitting, ranking, assembly, generation, orchestration."""

from .answer_generator import AnswerGenerator
from .context_assembler import ContextAssembler
from .passage_splitter import PassageSplitter
from .ranker import Ranker, cosine_similarity
from .retrieval_pipeline import RetrievalPipeline

__all__ = [
    "AnswerGenerator",
    "ContextAssembler",
    "PassageSplitter",
    "Ranker",
    "RetrievalPipeline",
    "cosine_similarity",
]
