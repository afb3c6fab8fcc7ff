from __future__ import annotations

import pytest

from fourleaf.core.classifier import (
    EMPTY_OBJECT_FALLBACK,
    REPHRASE_FALLBACK,
    classify,
    contains_incomplete_markers,
)
from fourleaf.core.types import Outcome


def test_text_field_is_success(make_result) -> None:
    result = classify(make_result(200, {"text": "hello"}))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == "hello"


def test_message_field_used_when_text_missing(make_result) -> None:
    result = classify(make_result(200, {"message": "  from message  "}))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == "from message"


def test_text_preferred_over_message(make_result) -> None:
    result = classify(make_result(200, {"text": "t", "message": "m"}))
    assert result.reply_text == "t"


def test_non_string_reply_is_stringified(make_result) -> None:
    result = classify(make_result(200, {"text": 42}))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == "42"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"clientId": "client-1"},
        {"text": ""},
        {"text": None},
        {"message": None, "clientId": "client-1"},
    ],
)
def test_empty_payloads(make_result, body) -> None:
    assert classify(make_result(200, body)).outcome is Outcome.EMPTY_PAYLOAD


def test_empty_body_counts_as_empty_object(make_result) -> None:
    assert classify(make_result(200, raw="")).outcome is Outcome.EMPTY_PAYLOAD


def test_client_id_key_is_configurable(make_result) -> None:
    result = classify(make_result(200, {"sid": "x"}), client_id_key="sid")
    assert result.outcome is Outcome.EMPTY_PAYLOAD


def test_whitespace_reply_falls_back_to_rephrase(make_result) -> None:
    result = classify(make_result(200, {"text": "   "}))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == REPHRASE_FALLBACK


def test_plain_string_body(make_result) -> None:
    result = classify(make_result(200, "  plain reply "))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == "plain reply"


def test_blank_plain_string_body_falls_back(make_result) -> None:
    result = classify(make_result(200, "   "))
    assert result.reply_text == REPHRASE_FALLBACK


def test_json_scalar_body_falls_back(make_result) -> None:
    result = classify(make_result(200, raw="null"))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == REPHRASE_FALLBACK


def test_other_objects_are_serialized(make_result) -> None:
    result = classify(make_result(200, {"answer": "馬拉松", "score": 1}))
    assert result.outcome is Outcome.SUCCESS
    assert '"answer": "馬拉松"' in (result.reply_text or "")


def test_arrays_are_serialized(make_result) -> None:
    result = classify(make_result(200, [1, 2]))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == "[\n  1,\n  2\n]"


def test_bare_client_id_on_non_200_success_is_not_empty(make_result) -> None:
    result = classify(make_result(201, {"clientId": "client-1"}))
    assert result.outcome is Outcome.SUCCESS
    assert result.reply_text == EMPTY_OBJECT_FALLBACK


def test_incomplete_markers_case_insensitive(make_result) -> None:
    result = classify(make_result(200, {"text": "Search Results in Html format..."}))
    assert result.outcome is Outcome.INCOMPLETE_MARKER


def test_single_marker_is_not_incomplete() -> None:
    assert contains_incomplete_markers("here are the search results") is False
    assert contains_incomplete_markers("SEARCH RESULTS as HTML") is True


@pytest.mark.parametrize("status", [500, 502, 503, 504, 401, 404])
def test_retryable_statuses(make_result, status: int) -> None:
    assert classify(make_result(status, {"text": "ignored"})).outcome is Outcome.RETRYABLE_HTTP_ERROR


@pytest.mark.parametrize("status", [400, 403, 429, 301])
def test_other_failures_are_fatal(make_result, status: int) -> None:
    result = classify(make_result(status, {"message": "forbidden"}))
    assert result.outcome is Outcome.FATAL_HTTP_ERROR
    assert result.detail == "forbidden"


def test_fatal_detail_from_raw_body(make_result) -> None:
    result = classify(make_result(418, raw="<h1>teapot</h1>"))
    assert result.outcome is Outcome.FATAL_HTTP_ERROR
    assert result.detail == "<h1>teapot</h1>"


def test_unparseable_success_body_is_fatal(make_result) -> None:
    result = classify(make_result(200, raw="not json at all"))
    assert result.outcome is Outcome.FATAL_HTTP_ERROR
    assert result.detail == "not json at all"
    assert result.status_code == 200
