"""Per-request retrieval pipeline.

One call to :meth:`RetrievalPipeline.run` walks the request through
``LOADING_DOCUMENTS -> SPLITTING -> EMBEDDING -> RANKING -> ASSEMBLING ->
GENERATING -> DONE``. Nothing outlives the call: documents, passages and
vectors are created per request and dropped afterwards.

Failures are attributed to the stage that raised them:

* bad input and missing configuration are rejected before any external call
* external-call failures surface as :class:`UpstreamError` subclasses that
  keep the original message and record the failing stage
* an empty corpus is not a failure; it ends in ``DONE`` with a fixed answer
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, TypeVar

from ..domain import (
    AnswerEnvelope,
    AnswerOutcome,
    Document,
    PipelineStage,
    RetrievalRequest,
    StoredDocument,
)
from ..domain.exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
    EmbeddingError,
    EmptyQueryError,
    LLMError,
    PDFExtractionError,
    PlanQAError,
    QueryTooLongError,
    RequestCancelledError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)
from ..domain.utils import clean_text
from ..ports.document_store_port import DocumentStorePort
from ..ports.embedding_port import EmbeddingPort
from ..ports.text_extractor_port import TextExtractorPort
from .answer_generator import AnswerGenerator
from .context_assembler import ContextAssembler
from .passage_splitter import PassageSplitter
from .prompts import NO_DOCUMENTS_ANSWER, NO_READABLE_TEXT_ANSWER
from .ranker import DEFAULT_TOP_K, Ranker

logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_with_timeout(fn: Callable[..., T], *args: Any, timeout: float | None, name: str) -> T:
    """Run ``fn(*args)`` on a worker thread and wait at most ``timeout`` seconds.

    A ``timeout`` of ``None`` or ``<= 0`` calls ``fn`` inline. On timeout the
    worker is abandoned (blocking client calls cannot be interrupted) and
    :class:`concurrent.futures.TimeoutError` is raised.
    """
    if not timeout or timeout <= 0:
        return fn(*args)

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"plan-qa-{name}")
    try:
        future = executor.submit(fn, *args)
        return future.result(timeout=timeout)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class _RequestTrace:
    """Stage bookkeeping for one request."""

    def __init__(self, cancel_event: threading.Event | None) -> None:
        self.stages: list[PipelineStage] = [PipelineStage.IDLE]
        self.cancel_event = cancel_event

    @property
    def current(self) -> PipelineStage:
        return self.stages[-1]

    def enter(self, stage: PipelineStage) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise RequestCancelledError(
                f"Request cancelled before {stage.value}",
                context={"stage": stage.value},
            )
        logger.debug("Pipeline %s -> %s", self.current.value, stage.value)
        self.stages.append(stage)

    def fail(self, exc: Exception) -> None:
        logger.warning("Pipeline failed during %s: %s", self.current.value, exc)
        self.stages.append(PipelineStage.FAILED)


class RetrievalPipeline:
    """Answers one question against the current document set."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        text_extractor: TextExtractorPort,
        embedder: EmbeddingPort,
        answer_generator: AnswerGenerator,
        splitter: PassageSplitter | None = None,
        ranker: Ranker | None = None,
        assembler: ContextAssembler | None = None,
        *,
        top_k: int = DEFAULT_TOP_K,
        fetch_concurrency: int = 4,
        embedding_timeout: float | None = 30.0,
        generation_timeout: float | None = 60.0,
        max_question_length: int = 2000,
    ) -> None:
        """Initialize the pipeline.

        Args:
            document_store: Lists stored documents and returns their bytes.
            text_extractor: Turns document bytes into page-separated text.
            embedder: Embeds the query and passages in one batch.
            answer_generator: Produces the grounded answer.
            splitter: Passage splitter (default window settings if omitted).
            ranker: Cosine ranker.
            assembler: Context assembler.
            top_k: Passages kept for the context.
            fetch_concurrency: Worker threads for fetch + extraction.
            embedding_timeout: Seconds allowed for the embedding call.
            generation_timeout: Seconds allowed for the completion call.
            max_question_length: Longest accepted question, in characters.
        """
        self.document_store = document_store
        self.text_extractor = text_extractor
        self.embedder = embedder
        self.answer_generator = answer_generator
        self.splitter = splitter or PassageSplitter()
        self.ranker = ranker or Ranker(top_k)
        self.assembler = assembler or ContextAssembler()
        self.top_k = top_k
        self.fetch_concurrency = max(1, fetch_concurrency)
        self.embedding_timeout = embedding_timeout
        self.generation_timeout = generation_timeout
        self.max_question_length = max_question_length

    # ------------------------------------------------------------------
    # Preflight
    # ------------------------------------------------------------------

    def validate_question(self, question: str) -> str:
        """Return the cleaned question or raise a validation error."""
        clean_question = clean_text(question or "").strip()
        if not clean_question:
            raise EmptyQueryError("Question is required")
        if len(clean_question) > self.max_question_length:
            raise QueryTooLongError(
                f"Question exceeds {self.max_question_length} characters",
                context={"length": len(clean_question)},
            )
        return clean_question

    def validate_configuration(self) -> None:
        """Raise ``ConfigurationError`` if an external service is unusable."""
        self.embedder.validate_configuration()
        self.answer_generator.llm.validate_configuration()

    # ------------------------------------------------------------------
    # External calls
    # ------------------------------------------------------------------

    def _external(
        self,
        stage: PipelineStage,
        error_cls: type[UpstreamError],
        fn: Callable[..., T],
        *args: Any,
        timeout: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> T:
        """Run an external call, mapping any failure to ``error_cls``."""
        try:
            return call_with_timeout(fn, *args, timeout=timeout, name=stage.value)
        except UpstreamError as exc:
            exc.at_stage(stage.value)
            raise
        except PlanQAError:
            raise
        except FutureTimeoutError as exc:
            limit = f" after {timeout:g}s" if timeout else ""
            raise UpstreamTimeoutError(
                str(exc) or f"{stage.value} call timed out{limit}",
                cause=exc,
                context=context,
                stage=stage.value,
            ) from exc
        except Exception as exc:
            raise error_cls(
                str(exc) or type(exc).__name__,
                cause=exc,
                context=context,
                stage=stage.value,
            ) from exc

    def _select_documents(self, document_id: str | None) -> list[StoredDocument]:
        stored = self._external(
            PipelineStage.LOADING_DOCUMENTS,
            DocumentStoreError,
            self.document_store.list_documents,
        )
        if document_id is None:
            return stored

        selected = [doc for doc in stored if doc.id == document_id]
        if not selected:
            raise DocumentNotFoundError(
                f"Document not found: {document_id}",
                context={"document_id": document_id},
            )
        return selected

    def _load_document(self, stored: StoredDocument) -> Document:
        context = {"document_id": stored.id}
        try:
            data = self._external(
                PipelineStage.LOADING_DOCUMENTS,
                DocumentStoreError,
                self.document_store.fetch_bytes,
                stored.id,
                context=context,
            )
        except ValidationError as exc:
            # The document was listed, so losing it now is a store failure
            raise DocumentStoreError(
                exc.message,
                cause=exc,
                context=context,
                stage=PipelineStage.LOADING_DOCUMENTS.value,
            ) from exc
        text = self._external(
            PipelineStage.LOADING_DOCUMENTS,
            PDFExtractionError,
            self.text_extractor.extract,
            data,
            context=context,
        )
        return Document(
            id=stored.id,
            display_name=stored.display_name,
            raw_text=text,
            project_name=stored.project_name,
        )

    def _load_documents(self, stored: list[StoredDocument]) -> list[Document]:
        """Fetch and extract documents concurrently, keeping store order."""
        if len(stored) == 1 or self.fetch_concurrency == 1:
            return [self._load_document(doc) for doc in stored]

        executor = ThreadPoolExecutor(
            max_workers=min(len(stored), self.fetch_concurrency),
            thread_name_prefix="plan-qa-fetch",
        )
        try:
            return list(executor.map(self._load_document, stored))
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    # ------------------------------------------------------------------
    # Request
    # ------------------------------------------------------------------

    def run(
        self,
        request: RetrievalRequest,
        *,
        top_k: int | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnswerEnvelope:
        """Answer one question.

        Args:
            request: Question and optional document selection.
            top_k: Override the configured number of context passages.
            cancel_event: When set, the request stops at the next stage
                boundary; it is checked last right before generation.

        Returns:
            AnswerEnvelope with the answer, cited passages and visited stages.

        Raises:
            ValidationError: Empty/too-long question, bad ``top_k``, unknown
                document id.
            ConfigurationError: Required credentials are missing.
            UpstreamError: Fetch, extraction, embedding or generation failed.
            RequestCancelledError: ``cancel_event`` was set.
        """
        question = self.validate_question(request.question)
        k = self.top_k if top_k is None else top_k
        if k < 1:
            raise ValidationError("top_k must be at least 1", context={"top_k": k})
        self.validate_configuration()

        trace = _RequestTrace(cancel_event)
        try:
            return self._run(trace, question, request.document_id, k)
        except Exception as exc:
            trace.fail(exc)
            raise

    def _run(
        self, trace: _RequestTrace, question: str, document_id: str | None, k: int
    ) -> AnswerEnvelope:
        trace.enter(PipelineStage.LOADING_DOCUMENTS)
        stored = self._select_documents(document_id)
        if not stored:
            logger.info("No documents uploaded; returning fixed answer")
            trace.enter(PipelineStage.DONE)
            return AnswerEnvelope(
                answer_text=NO_DOCUMENTS_ANSWER,
                outcome=AnswerOutcome.NO_DOCUMENTS,
                stages=list(trace.stages),
            )
        documents = self._load_documents(stored)
        logger.info("Loaded %d documents", len(documents))

        trace.enter(PipelineStage.SPLITTING)
        passages = self.splitter.split_all(documents)
        if not passages:
            logger.info("No readable text in %d documents", len(documents))
            trace.enter(PipelineStage.DONE)
            return AnswerEnvelope(
                answer_text=NO_READABLE_TEXT_ANSWER,
                outcome=AnswerOutcome.NO_READABLE_TEXT,
                stages=list(trace.stages),
            )
        logger.info("Split into %d passages", len(passages))

        trace.enter(PipelineStage.EMBEDDING)
        texts = [question] + [passage.text for passage in passages]
        vectors = self._external(
            PipelineStage.EMBEDDING,
            EmbeddingError,
            self.embedder.embed,
            texts,
            timeout=self.embedding_timeout,
        )
        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"Embedding service returned {len(vectors)} vectors for {len(texts)} inputs",
                stage=PipelineStage.EMBEDDING.value,
            )

        trace.enter(PipelineStage.RANKING)
        ranked = self.ranker.rank(vectors[0], list(zip(passages, vectors[1:])), k)
        logger.debug("Top passages: %s", [(item.passage.id, round(item.score, 4)) for item in ranked])

        trace.enter(PipelineStage.ASSEMBLING)
        context = self.assembler.assemble(ranked)

        trace.enter(PipelineStage.GENERATING)
        answer = self._external(
            PipelineStage.GENERATING,
            LLMError,
            self.answer_generator.generate,
            question,
            context,
            timeout=self.generation_timeout,
        )

        trace.enter(PipelineStage.DONE)
        return AnswerEnvelope(
            answer_text=answer,
            scored_passages=ranked,
            outcome=AnswerOutcome.ANSWERED,
            stages=list(trace.stages),
        )
