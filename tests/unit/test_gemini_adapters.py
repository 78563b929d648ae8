"""Unit tests for the Gemini embedding and completion adapters.

The google-genai client is replaced with a MagicMock; no request leaves the
process.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from plan_qa.adapters.outbound.embedding.gemini_embedding import (
    GeminiEmbeddingAdapter,
    is_rate_limit_error,
)
from plan_qa.adapters.outbound.llm.gemini_llm import GeminiLLMAdapter
from plan_qa.core.domain.exceptions import (
    EmbeddingError,
    EmbeddingRateLimitError,
    LLMError,
    LLMRateLimitError,
    MissingAPIKeyError,
)

pytestmark = pytest.mark.unit


def embed_response(texts):
    return SimpleNamespace(
        embeddings=[SimpleNamespace(values=[float(len(text)), 1.0]) for text in texts]
    )


@pytest.fixture
def embed_client():
    client = MagicMock()
    client.models.embed_content.side_effect = lambda model, contents, config: embed_response(
        contents
    )
    return client


def embedding_adapter(client, **kwargs):
    adapter = GeminiEmbeddingAdapter(api_key="test-key", **kwargs)
    adapter._client = client
    return adapter


class TestRateLimitDetection:
    @pytest.mark.parametrize(
        "exc",
        [
            SimpleNamespace(code=429),
            Exception("429 RESOURCE_EXHAUSTED"),
            Exception("Quota exceeded for metric"),
            Exception("rate limit reached"),
        ],
    )
    def test_rate_limit_errors(self, exc):
        assert is_rate_limit_error(exc)

    def test_other_errors(self):
        assert not is_rate_limit_error(Exception("500 INTERNAL"))


class TestGeminiEmbeddingAdapter:
    def test_embeds_in_order(self, embed_client):
        vectors = embedding_adapter(embed_client).embed(["a", "bbb", "cc"])
        assert vectors == [[1.0, 1.0], [3.0, 1.0], [2.0, 1.0]]

    def test_sends_model_and_task_type(self, embed_client):
        embedding_adapter(embed_client, model_name="gemini-embedding-001").embed(["a"])

        kwargs = embed_client.models.embed_content.call_args.kwargs
        assert kwargs["model"] == "gemini-embedding-001"
        assert kwargs["config"] == {"task_type": "SEMANTIC_SIMILARITY"}

    def test_paginates_large_inputs(self, embed_client):
        texts = ["x" * (i + 1) for i in range(7)]
        vectors = embedding_adapter(embed_client, batch_size=3).embed(texts)

        assert embed_client.models.embed_content.call_count == 3
        assert [v[0] for v in vectors] == [float(i + 1) for i in range(7)]

    def test_empty_input_is_rejected(self, embed_client):
        with pytest.raises(ValueError):
            embedding_adapter(embed_client).embed([])
        embed_client.models.embed_content.assert_not_called()

    def test_wrong_vector_count_is_an_error(self, embed_client):
        embed_client.models.embed_content.side_effect = None
        embed_client.models.embed_content.return_value = embed_response(["only one"])

        with pytest.raises(EmbeddingError, match="1 vectors for 2 inputs"):
            embedding_adapter(embed_client).embed(["a", "b"])

    def test_service_error_keeps_message(self, embed_client):
        embed_client.models.embed_content.side_effect = RuntimeError("503 UNAVAILABLE")

        with pytest.raises(EmbeddingError) as exc_info:
            embedding_adapter(embed_client).embed(["a"])

        assert exc_info.value.message == "503 UNAVAILABLE"
        assert not isinstance(exc_info.value, EmbeddingRateLimitError)

    def test_quota_error_is_a_rate_limit_error(self, embed_client):
        embed_client.models.embed_content.side_effect = RuntimeError("429 RESOURCE_EXHAUSTED")

        with pytest.raises(EmbeddingRateLimitError):
            embedding_adapter(embed_client).embed(["a"])

    def test_missing_key(self):
        with pytest.raises(MissingAPIKeyError, match="GOOGLE_API_KEY missing"):
            GeminiEmbeddingAdapter(api_key="").validate_configuration()


class TestGeminiLLMAdapter:
    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.models.generate_content.return_value = SimpleNamespace(
            candidates=[object()], text="The garage is 24x24 ft."
        )
        return client

    def adapter(self, client):
        adapter = GeminiLLMAdapter(api_key="test-key", model="gemini-2.0-flash", temperature=0.2)
        adapter._client = client
        return adapter

    def test_sends_system_instruction_and_temperature(self, client):
        answer = self.adapter(client).complete("Use only the text.", "Question: garage?")

        assert answer == "The garage is 24x24 ft."
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["contents"] == "Question: garage?"
        assert kwargs["config"].system_instruction == "Use only the text."
        assert kwargs["config"].temperature == 0.2

    def test_no_candidates_returns_empty(self, client):
        client.models.generate_content.return_value = SimpleNamespace(candidates=[], text=None)
        assert self.adapter(client).complete("s", "u") == ""

    def test_service_error_keeps_message(self, client):
        client.models.generate_content.side_effect = RuntimeError("deadline exceeded")

        with pytest.raises(LLMError, match="deadline exceeded"):
            self.adapter(client).complete("s", "u")

    def test_quota_error_is_a_rate_limit_error(self, client):
        client.models.generate_content.side_effect = RuntimeError("Quota exceeded")

        with pytest.raises(LLMRateLimitError):
            self.adapter(client).complete("s", "u")

    def test_missing_key(self):
        with pytest.raises(MissingAPIKeyError):
            GeminiLLMAdapter(api_key="").validate_configuration()

    def test_model_name(self):
        assert GeminiLLMAdapter(api_key="k", model="gemini-2.5-flash").model_name == "gemini-2.5-flash"
