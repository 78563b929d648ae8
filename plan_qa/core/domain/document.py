"""Document and passage models for the retrieval pipeline."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredDocument:
    """A PDF held by the document store, before its text is extracted.

    Attributes:
        id: Stable opaque identifier (the stored file name).
        display_name: Name shown in citations.
        project_name: Project the upload was filed under, if any.
        uploaded_at: ISO-8601 upload timestamp.
    """

    id: str
    display_name: str
    project_name: str | None = None
    uploaded_at: str | None = None


@dataclass(frozen=True)
class Document:
    """A stored document together with its extracted text.

    ``raw_text`` keeps the extractor's form-feed page separators.
    """

    id: str
    display_name: str
    raw_text: str
    project_name: str | None = None


@dataclass(frozen=True)
class Passage:
    """A bounded, whitespace-normalized slice of one page of a document.

    Attributes:
        id: Deterministic id built from document id, page and window index.
        document_id: Id of the source document.
        page: 1-based page number.
        text: Non-empty passage text.
        display_name: Source document name for citations.
        project_name: Source project for citations, if known.
    """

    id: str
    document_id: str
    page: int
    text: str
    display_name: str = ""
    project_name: str | None = None


@dataclass(frozen=True)
class ScoredPassage:
    """A passage with its cosine similarity to the query.

    Attributes:
        passage: The ranked passage.
        score: Finite similarity in [-1, 1]; 0.0 when undefined.
    """

    passage: Passage
    score: float
