"""Tests for the Index Error Classifier (caused_by / root_cause resolution)."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
from elasticsearch import BadRequestError

from esplatform.core.classifier import IndexErrorClassifier, failure_message
from esplatform.models.classification import ClassificationLevel


def _payload(**error: Any) -> str:
    return json.dumps({"error": error, "status": 400})


class TestUnstructuredFailures:
    """Messages that are not an Elasticsearch error body."""

    def test_plain_text_is_unknown_error(self) -> None:
        result = IndexErrorClassifier.classify(RuntimeError("Connection refused"))
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "unknown error"
        assert result.type is None

    def test_json_scalar_is_unknown_error(self) -> None:
        result = IndexErrorClassifier.classify("42")
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "unknown error"

    def test_empty_message_is_unknown_error(self) -> None:
        result = IndexErrorClassifier.classify(Exception())
        assert result.reason == "unknown error"

    def test_deeply_nested_message_is_unknown_error(self) -> None:
        result = IndexErrorClassifier.classify(RuntimeError("[" * 200000))
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "unknown error"

    def test_json_without_error_section_returns_raw_message(self) -> None:
        message = json.dumps({"acknowledged": False})
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == message

    def test_empty_error_section_returns_raw_message(self) -> None:
        message = json.dumps({"error": {}})
        assert IndexErrorClassifier.classify(message).reason == message

    def test_string_error_section_returns_raw_message(self) -> None:
        message = json.dumps({"error": "no handler found for uri"})
        assert IndexErrorClassifier.classify(message).reason == message


class TestCausedByResolution:
    """Resolution order: caused_by.caused_by, then caused_by, then error."""

    def test_two_levels_deep_encrypted_is_notice(self) -> None:
        message = _payload(
            type="exception",
            reason="java.lang.IllegalArgumentException: ElasticsearchParseException[Error parsing document]",
            caused_by={
                "type": "illegal_argument_exception",
                "reason": "ElasticsearchParseException[Error parsing document in field [content]]",
                "caused_by": {
                    "type": "encrypted_document_exception",
                    "reason": "Unable to process encrypted document",
                },
            },
        )
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.NOTICE
        assert result.reason == "Unable to process encrypted document"
        assert result.type == "encrypted_document_exception"

    def test_invalid_password_is_notice(self) -> None:
        message = _payload(
            type="exception",
            reason="outer",
            caused_by={
                "type": "parse_exception",
                "reason": "middle",
                "caused_by": {"type": "invalid_password_exception", "reason": "Wrong password"},
            },
        )
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.NOTICE
        assert result.type == "invalid_password_exception"

    def test_one_level_unknown_type_is_error(self) -> None:
        message = _payload(
            type="mapper_parsing_exception",
            reason="failed to parse",
            caused_by={
                "type": "mapper_parsing_exception",
                "reason": "failed to parse field [title] of type [text]",
            },
        )
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "failed to parse field [title] of type [text]"
        assert result.type == "mapper_parsing_exception"

    def test_two_levels_preferred_over_one(self) -> None:
        message = _payload(
            type="a",
            reason="top",
            caused_by={"type": "b", "reason": "middle", "caused_by": {"type": "c", "reason": "inner"}},
        )
        assert IndexErrorClassifier.classify(message).reason == "inner"

    def test_benign_type_at_one_level(self) -> None:
        message = _payload(
            type="exception",
            reason="top",
            caused_by={"type": "encrypted_document_exception", "reason": "Encrypted"},
        )
        assert IndexErrorClassifier.classify(message).level == ClassificationLevel.NOTICE

    def test_top_level_error_used_without_caused_by(self) -> None:
        message = _payload(type="version_conflict_engine_exception", reason="version conflict")
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "version conflict"
        assert result.type == "version_conflict_engine_exception"


class TestRootCauseFallback:
    """Fallback on error.root_cause when the resolved cause has no reason."""

    def test_root_cause_without_caused_by(self) -> None:
        message = _payload(
            type="illegal_argument_exception",
            root_cause=[
                {"type": "illegal_argument_exception", "reason": "pipeline with id [attachment] does not exist"},
            ],
        )
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "pipeline with id [attachment] does not exist"
        assert result.type == "illegal_argument_exception"

    def test_cause_without_reason_falls_back_to_root_cause(self) -> None:
        message = _payload(
            type="exception",
            reason="top",
            caused_by={"type": "encrypted_document_exception"},
            root_cause=[{"type": "parse_exception", "reason": "root reason"}],
        )
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == "root reason"
        assert result.type == "parse_exception"

    def test_empty_root_cause_reason_returns_raw_message(self) -> None:
        message = _payload(type="exception", root_cause=[{"type": "exception", "reason": ""}])
        result = IndexErrorClassifier.classify(message)
        assert result.level == ClassificationLevel.ERROR
        assert result.reason == message

    def test_no_reason_anywhere_returns_raw_message(self) -> None:
        message = _payload(type="exception")
        assert IndexErrorClassifier.classify(message).reason == message

    def test_malformed_root_cause_does_not_raise(self) -> None:
        message = _payload(type="exception", root_cause="oops")
        assert IndexErrorClassifier.classify(message).level == ClassificationLevel.ERROR


class TestFailureMessage:
    def test_string_passthrough(self) -> None:
        assert failure_message("boom") == "boom"

    def test_exception_without_body_uses_str(self) -> None:
        assert failure_message(ValueError("bad value")) == "bad value"

    def test_api_error_body_is_serialized(self) -> None:
        body = {"error": {"type": "mapper_parsing_exception", "reason": "failed to parse"}, "status": 400}
        error = BadRequestError("mapper_parsing_exception", meta=MagicMock(status=400), body=body)
        assert json.loads(failure_message(error)) == body

    @pytest.mark.parametrize(
        ("inner_type", "level"),
        [
            ("encrypted_document_exception", ClassificationLevel.NOTICE),
            ("invalid_password_exception", ClassificationLevel.NOTICE),
            ("tika_exception", ClassificationLevel.ERROR),
        ],
    )
    def test_api_error_classified_from_body(self, inner_type: str, level: ClassificationLevel) -> None:
        body = {
            "error": {
                "type": "exception",
                "reason": "outer",
                "caused_by": {"type": "x", "reason": "mid", "caused_by": {"type": inner_type, "reason": "inner"}},
            },
            "status": 500,
        }
        error = BadRequestError("exception", meta=MagicMock(status=500), body=body)
        result = IndexErrorClassifier.classify(error)
        assert result.level == level
        assert result.reason == "inner"
