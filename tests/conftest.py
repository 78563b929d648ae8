"""
Pytest configuration and shared fixtures.
"""

import re
import shutil
import tempfile
from pathlib import Path

import pytest

from plan_qa.core.domain import StoredDocument
from plan_qa.core.ports import DocumentStorePort, EmbeddingPort, LLMPort, TextExtractorPort


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP API through TestClient)")


# =============================================================================
# In-memory fakes for the ports
# =============================================================================

VOCABULARY = ["garage", "size", "kitchen", "roof", "window", "bedroom", "stair"]


class FakeDocumentStore(DocumentStorePort):
    """Documents kept in memory; bytes are the UTF-8 text itself."""

    def __init__(self, documents: dict[str, str] | None = None, project_name: str | None = None):
        self.documents = dict(documents or {})
        self.project_name = project_name
        self.list_calls = 0
        self.fetched: list[str] = []

    def list_documents(self) -> list[StoredDocument]:
        self.list_calls += 1
        return [
            StoredDocument(id=doc_id, display_name=doc_id, project_name=self.project_name)
            for doc_id in self.documents
        ]

    def fetch_bytes(self, document_id: str) -> bytes:
        self.fetched.append(document_id)
        return self.documents[document_id].encode("utf-8")


class FakeTextExtractor(TextExtractorPort):
    def extract(self, data: bytes) -> str:
        return data.decode("utf-8")


class KeywordEmbedder(EmbeddingPort):
    """Bag-of-words vectors over a tiny vocabulary."""

    def __init__(self):
        self.calls: list[list[str]] = []

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            words = re.findall(r"[a-z]+", text.lower())
            vectors.append([float(words.count(term)) for term in VOCABULARY])
        return vectors


class RecordingLLM(LLMPort):
    """Returns a canned completion and records every prompt."""

    model_name = "fake-llm"

    def __init__(self, completion: str = "The garage is 24x24 ft (source: plan.pdf p.2)."):
        self.completion = completion
        self.calls: list[tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.completion


@pytest.fixture
def plan_text():
    """A three-page plan; the garage size is on page 2."""
    return (
        "Floor plan overview. Kitchen and living area on the ground floor."
        "\f"
        "Garage size: 24x24 ft. Garage door faces the street."
        "\f"
        "Roof pitch 6/12. Bedroom windows are egress rated."
    )


@pytest.fixture
def document_store(plan_text):
    return FakeDocumentStore({"plan.pdf": plan_text}, project_name="Maple St")


@pytest.fixture
def text_extractor():
    return FakeTextExtractor()


@pytest.fixture
def embedder():
    return KeywordEmbedder()


@pytest.fixture
def llm():
    return RecordingLLM()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    dir_path = Path(tempfile.mkdtemp(prefix="plan_qa_test_"))
    yield dir_path
    if dir_path.exists():
        shutil.rmtree(dir_path)


@pytest.fixture
def minimal_pdf_bytes():
    """Smallest well-formed single-page PDF with no text."""
    from io import BytesIO

    from pypdf import PdfWriter

    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def store_factory():
    """The in-memory store class, for tests that need their own documents."""
    return FakeDocumentStore
