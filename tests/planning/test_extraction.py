"""Tests for JSON extraction from raw model text."""

import pytest

from app.planning.errors import ParseFailureError
from app.planning.llm.extraction import (
    extract_json,
    find_balanced_span,
    match_tolerant,
    strip_code_fence,
)

PLAN = {"week_schedule": {"Monday": {"exercises": [{"name": "Bench Press", "target_sets": 3, "target_reps": 10}]}}}
PLAN_TEXT = '{"week_schedule": {"Monday": {"exercises": [{"name": "Bench Press", "target_sets": 3, "target_reps": 10}]}}}'


def test_extract_plain_json():
    assert extract_json(PLAN_TEXT) == PLAN


def test_extract_from_tagged_fence():
    text = f"```json\n{PLAN_TEXT}\n```"
    assert extract_json(text) == PLAN


def test_extract_from_untagged_fence():
    text = f"```\n{PLAN_TEXT}\n```"
    assert extract_json(text) == PLAN


def test_extract_from_surrounding_prose():
    text = f"Here is your plan:\n{PLAN_TEXT}\nLet me know if you want changes!"
    assert extract_json(text) == PLAN


def test_extract_array_from_prose():
    text = 'Sure! [{"name": "Face Pull", "target_sets": 3, "target_reps": 15}] Enjoy.'
    assert extract_json(text) == [{"name": "Face Pull", "target_sets": 3, "target_reps": 15}]


def test_extract_empty_raises():
    with pytest.raises(ParseFailureError) as exc_info:
        extract_json("   ")
    assert exc_info.value.original_text == "   "


def test_extract_non_string_raises():
    with pytest.raises(ParseFailureError) as exc_info:
        extract_json(None)  # type: ignore[arg-type]
    assert exc_info.value.original_text is None


def test_extract_garbage_raises_with_original_text():
    text = "I cannot produce a plan right now."
    with pytest.raises(ParseFailureError) as exc_info:
        extract_json(text)
    assert exc_info.value.original_text == text


def test_extract_unbalanced_raises():
    with pytest.raises(ParseFailureError):
        extract_json('{"week_schedule": {"Monday": {"exercises": [')


def test_strip_code_fence_leaves_unfenced_text():
    assert strip_code_fence("  {\"a\": 1}  ") == '{"a": 1}'


def test_strip_code_fence_removes_single_fence():
    assert strip_code_fence("```json\n[1, 2]\n```") == "[1, 2]"


def test_find_balanced_span_object_first():
    assert find_balanced_span('text {"a": [1, 2]} more [3]') == '{"a": [1, 2]}'


def test_find_balanced_span_array_first():
    assert find_balanced_span('text [{"a": 1}] then {"b": 2}') == '[{"a": 1}]'


def test_find_balanced_span_none_without_delimiters():
    assert find_balanced_span("no json here") is None


def test_find_balanced_span_none_when_unclosed():
    assert find_balanced_span('{"a": {"b": 1}') is None


def test_match_tolerant_one_nesting_level():
    assert match_tolerant('result: {"a": {"b": 1}}') == '{"a": {"b": 1}}'


def test_match_tolerant_no_match():
    assert match_tolerant("nothing to see") is None
