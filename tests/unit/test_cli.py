"""Unit tests for the command line interface."""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from plan_qa.adapters.inbound.cli.commands import app
from plan_qa.adapters.outbound.document_store.local_store import LocalDocumentStore
from plan_qa.core.domain import AnswerEnvelope, AnswerOutcome, Passage, ScoredPassage
from plan_qa.core.domain.exceptions import EmbeddingError

pytestmark = pytest.mark.unit

runner = CliRunner()


@pytest.fixture
def upload_store(temp_dir):
    store = LocalDocumentStore(temp_dir / "uploads")
    with patch("plan_qa.composition.container.get_document_store", return_value=store):
        yield store


def test_ask_prints_answer_and_sources():
    pipeline = MagicMock()
    pipeline.run.return_value = AnswerEnvelope(
        answer_text="The garage is 24x24 ft.",
        scored_passages=[
            ScoredPassage(
                passage=Passage(
                    id="plan.pdf-p2-c0",
                    document_id="plan.pdf",
                    page=2,
                    text="Garage size: 24x24 ft",
                    display_name="plan.pdf",
                ),
                score=0.91,
            )
        ],
    )

    with patch("plan_qa.composition.container.get_pipeline", return_value=pipeline):
        result = runner.invoke(app, ["ask", "What is the garage size?", "--top-k", "3"])

    assert result.exit_code == 0
    assert "24x24" in result.output
    assert "plan.pdf p.2" in result.output
    request = pipeline.run.call_args.args[0]
    assert request.question == "What is the garage size?"
    assert pipeline.run.call_args.kwargs["top_k"] == 3


def test_ask_with_empty_corpus_prints_fixed_answer():
    pipeline = MagicMock()
    pipeline.run.return_value = AnswerEnvelope(
        answer_text="No documents uploaded yet.", outcome=AnswerOutcome.NO_DOCUMENTS
    )

    with patch("plan_qa.composition.container.get_pipeline", return_value=pipeline):
        result = runner.invoke(app, ["ask", "anything"])

    assert result.exit_code == 0
    assert "No documents uploaded yet." in result.output


def test_ask_reports_errors_with_code():
    pipeline = MagicMock()
    pipeline.run.side_effect = EmbeddingError("boom", stage="embedding")

    with patch("plan_qa.composition.container.get_pipeline", return_value=pipeline):
        result = runner.invoke(app, ["ask", "anything"])

    assert result.exit_code == 1
    assert "PQA_EMB_001" in result.output
    assert "boom" in result.output


def test_upload_and_list(upload_store, temp_dir):
    pdf = temp_dir / "plan.pdf"
    pdf.write_bytes(b"%PDF-1.4 plan")

    result = runner.invoke(app, ["upload", str(pdf), "--project", "Maple St"])
    assert result.exit_code == 0
    assert "Stored" in result.output

    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "plan.pdf" in result.output
    assert "Maple St" in result.output


def test_upload_rejects_non_pdf(upload_store, temp_dir):
    notes = temp_dir / "notes.txt"
    notes.write_text("hello")

    result = runner.invoke(app, ["upload", str(notes)])

    assert result.exit_code == 1
    assert "PQA_VAL_005" in result.output
    assert upload_store.list_documents() == []


def test_list_empty(upload_store):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No documents uploaded yet." in result.output
