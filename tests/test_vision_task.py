"""Tests for the Celery vision task (run in-process, no broker)."""

import json

import pytest

import tasks.vision
from analyzer.errors import VisionConfigurationError
from utils.validation.vision_validator import validate_vision_result


def test_task_returns_result_document(monkeypatch, valid_payload):
    result = validate_vision_result(json.dumps(valid_payload))

    async def fake(desktop, mobile):
        return result

    monkeypatch.setattr(tasks.vision, "analyze_above_fold", fake)

    document = tasks.vision.analyze_above_fold_task("ZA==", "bQ==")

    assert document == result.to_dict()
    json.dumps(document)


def test_task_propagates_pipeline_errors(monkeypatch):
    async def fake(desktop, mobile):
        raise VisionConfigurationError("OPENAI_API_KEY is not configured")

    monkeypatch.setattr(tasks.vision, "analyze_above_fold", fake)

    with pytest.raises(VisionConfigurationError):
        tasks.vision.analyze_above_fold_task("ZA==", "bQ==")


def test_errors_survive_json_result_serialization():
    # Celery rebuilds failures as exc_type(*args) from the JSON backend
    error = VisionConfigurationError("OPENAI_API_KEY is not configured")

    rebuilt = type(error)(*error.args)

    assert str(rebuilt) == str(error)
