"""Composition root wiring adapters to the retrieval pipeline."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.document_store.local_store import LocalDocumentStore
from ..adapters.outbound.embedding.gemini_embedding import GeminiEmbeddingAdapter
from ..adapters.outbound.llm.gemini_llm import GeminiLLMAdapter
from ..adapters.outbound.text_extraction.pypdf_extractor import PyPDFTextExtractor
from ..config.settings import settings
from ..core.services.answer_generator import AnswerGenerator
from ..core.services.context_assembler import ContextAssembler
from ..core.services.passage_splitter import PassageSplitter
from ..core.services.ranker import Ranker
from ..core.services.retrieval_pipeline import RetrievalPipeline

logger = logging.getLogger(__name__)


@lru_cache
def get_document_store() -> LocalDocumentStore:
    logger.info("Initializing LocalDocumentStore at %s", settings.uploads_dir)
    return LocalDocumentStore(settings.uploads_dir, max_upload_bytes=settings.max_upload_bytes)


@lru_cache
def get_text_extractor() -> PyPDFTextExtractor:
    return PyPDFTextExtractor()


@lru_cache
def get_embedder() -> GeminiEmbeddingAdapter:
    logger.info("Initializing GeminiEmbeddingAdapter (%s)...", settings.embedding_model)
    return GeminiEmbeddingAdapter(
        api_key=settings.google_api_key,
        model_name=settings.embedding_model,
        task_type=settings.embedding_task_type or None,
        batch_size=settings.embedding_batch_size,
    )


@lru_cache
def get_llm() -> GeminiLLMAdapter:
    logger.info("Initializing GeminiLLMAdapter (%s)...", settings.llm_model)
    return GeminiLLMAdapter(
        api_key=settings.google_api_key,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_output_tokens=settings.llm_max_output_tokens,
    )


@lru_cache
def get_pipeline() -> RetrievalPipeline:
    """Build the pipeline.

    The pipeline itself holds no per-request state, so one instance serves
    every request.
    """
    logger.info("Initializing RetrievalPipeline...")
    return RetrievalPipeline(
        document_store=get_document_store(),
        text_extractor=get_text_extractor(),
        embedder=get_embedder(),
        answer_generator=AnswerGenerator(get_llm()),
        splitter=PassageSplitter(settings.passage_size, settings.passage_overlap),
        ranker=Ranker(settings.top_k),
        assembler=ContextAssembler(),
        top_k=settings.top_k,
        fetch_concurrency=settings.fetch_concurrency,
        embedding_timeout=settings.embedding_timeout_seconds,
        generation_timeout=settings.generation_timeout_seconds,
        max_question_length=settings.max_question_length,
    )
