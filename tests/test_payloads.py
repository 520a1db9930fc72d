from __future__ import annotations

import pytest

from career_guidance.errors import RoadmapBuildError, SchemaViolationError
from career_guidance.schemas.match import CareerMatchBatch
from career_guidance.services.payloads import load_json_object, parse_structured_payload, strip_code_fence


def test_strip_code_fence_variants() -> None:
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('```\n{"a": 1}```') == '{"a": 1}'
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


@pytest.mark.parametrize("text", ["", "   ", "not json", "[1, 2]", '"just a string"', '{"a": 1} trailing'])
def test_load_json_object_rejects_non_objects(text: str) -> None:
    with pytest.raises(SchemaViolationError):
        load_json_object(text)


def test_error_class_is_configurable() -> None:
    with pytest.raises(RoadmapBuildError):
        parse_structured_payload("{}", CareerMatchBatch, RoadmapBuildError)


def test_schema_errors_name_the_failing_field() -> None:
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_structured_payload('{"career_matches": [{"career": "Chef"}]}', CareerMatchBatch)
    assert "career_matches.0.compatibility_score" in str(excinfo.value)


def test_valid_payload_is_parsed() -> None:
    batch = parse_structured_payload(
        '{"career_matches": [{"career": "Chef", "compatibility_score": "70", "reasoning": "Enjoys cooking"}]}',
        CareerMatchBatch,
    )
    assert batch.career_matches[0].compatibility_score == 70
