"""Unit tests for core data models."""

import pytest

from flowloc.core.exceptions import InvalidJobTransition, ParseError
from flowloc.core.models import (
    ExtractedText,
    TranslatedText,
    ScanResult,
    TranslationJob,
    JobStatus,
    TextContext
)


@pytest.fixture
def extracted():
    return ExtractedText(
        id="node_0_name",
        path=("nodes", 0, "name"),
        original="Start",
        context=TextContext.NODE,
        type="name",
        node_type="n8n-nodes-base.start"
    )


class TestExtractedText:
    """Test extracted text records."""

    def test_to_dict(self, extracted):
        assert extracted.to_dict() == {
            "id": "node_0_name",
            "path": "nodes[0].name",
            "original": "Start",
            "context": "node",
            "type": "name",
            "nodeType": "n8n-nodes-base.start",
        }

    def test_node_type_omitted_when_missing(self):
        item = ExtractedText("workflow_name", ("name",), "Demo", TextContext.WORKFLOW, "name")
        assert "nodeType" not in item.to_dict()

    def test_immutable(self, extracted):
        with pytest.raises(AttributeError):
            extracted.original = "Other"


class TestTranslatedText:
    """Test translated text records."""

    def test_from_extracted_copies_fields(self, extracted):
        item = TranslatedText.from_extracted(extracted, "開始", "ja", "mock", quality_score=85)

        assert item.id == extracted.id
        assert item.path == extracted.path
        assert item.original == "Start"
        assert item.translated == "開始"
        assert item.target_language == "ja"
        assert item.translation_engine == "mock"
        assert item.quality_score == 85
        assert item.translated_at is not None

    def test_to_dict(self, extracted):
        item = TranslatedText.from_extracted(extracted, "開始", "ja", "mock", 85, "2024-01-01T00:00:00+00:00")
        data = item.to_dict()

        assert data["translated"] == "開始"
        assert data["targetLanguage"] == "ja"
        assert data["translationEngine"] == "mock"
        assert data["qualityScore"] == 85
        assert data["translatedAt"] == "2024-01-01T00:00:00+00:00"


class TestScanResult:
    """Test scan results."""

    def test_raise_for_error_noop_on_success(self):
        ScanResult(success=True).raise_for_error()

    def test_to_dict_with_error(self):
        result = ScanResult(success=False, error=ParseError("bad document", "list"))
        assert result.to_dict()["error"] == "bad document"
        assert result.to_dict()["extractedTexts"] == []


class TestTranslationJob:
    """Test the job state machine."""

    def test_defaults(self):
        job = TranslationJob(target_language="ja", engine="google")

        assert job.status is JobStatus.PENDING
        assert job.source_language == "en"
        assert len(job.job_id) == 32
        assert job.created_at is not None
        assert not job.is_finished

    def test_ids_unique(self):
        assert TranslationJob("ja", "google").job_id != TranslationJob("ja", "google").job_id

    def test_complete(self):
        job = TranslationJob("ja", "mock")
        job.start()
        assert job.status is JobStatus.PROCESSING
        assert job.started_at is not None

        job.complete([], {"name": "デモ"}, 85, {"total_texts": 0})

        assert job.status is JobStatus.COMPLETED
        assert job.is_finished
        assert job.translated_document == {"name": "デモ"}
        assert job.quality_score == 85
        assert job.completed_at is not None
        assert job.error_message is None

    def test_fail(self):
        job = TranslationJob("ja", "mock")
        job.start()
        job.fail("No texts available for translation")

        assert job.status is JobStatus.FAILED
        assert job.error_message == "No texts available for translation"
        assert job.translated_document is None

    def test_cannot_complete_pending_job(self):
        with pytest.raises(InvalidJobTransition):
            TranslationJob("ja", "mock").complete([], {}, 0)

    def test_cannot_fail_pending_job(self):
        with pytest.raises(InvalidJobTransition):
            TranslationJob("ja", "mock").fail("boom")

    def test_cannot_start_twice(self):
        job = TranslationJob("ja", "mock")
        job.start()
        with pytest.raises(InvalidJobTransition):
            job.start()

    @pytest.mark.parametrize("finish", ["complete", "fail"])
    def test_finished_jobs_are_terminal(self, finish):
        job = TranslationJob("ja", "mock")
        job.start()
        if finish == "complete":
            job.complete([], {}, 0)
        else:
            job.fail("boom")

        with pytest.raises(InvalidJobTransition) as exc_info:
            job.start()
        assert exc_info.value.current == job.status.value
        with pytest.raises(InvalidJobTransition):
            job.fail("again")

    def test_to_dict(self):
        job = TranslationJob("fr", "deepl", source_language="en")
        data = job.to_dict()

        assert data["id"] == job.job_id
        assert data["status"] == "pending"
        assert data["targetLanguage"] == "fr"
        assert data["translationEngine"] == "deepl"
        assert data["translatedTexts"] == []
