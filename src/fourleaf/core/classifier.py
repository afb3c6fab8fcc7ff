"""Response classification for chat endpoint attempts."""

from __future__ import annotations

import json
from typing import Any

from fourleaf.core.types import Classification, Outcome, PlainText, Structured, TransportResult, Unparseable

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504, 401, 404})
SUCCESS_STATUS = 200
CLIENT_ID_KEY = "clientId"
REPLY_FIELDS = ("text", "message")
DETAIL_FIELDS = ("message", "error", "text")
INCOMPLETE_MARKERS = ("search results", "html")

REPHRASE_FALLBACK = "Please rephrase your question, thank you."
EMPTY_OBJECT_FALLBACK = "Network is unstable, please try again."
MAX_DETAIL_CHARS = 500


def classify(result: TransportResult, *, client_id_key: str = CLIENT_ID_KEY) -> Classification:
    """Label one transport result. Never raises."""
    status = result.status_code
    if status in RETRYABLE_STATUS_CODES:
        return Classification(Outcome.RETRYABLE_HTTP_ERROR, status, detail=_error_detail(result))
    if not result.ok:
        return Classification(Outcome.FATAL_HTTP_ERROR, status, detail=_error_detail(result))

    parsed = result.parsed
    if isinstance(parsed, Unparseable):
        return Classification(Outcome.FATAL_HTTP_ERROR, status, detail=_truncate(parsed.raw.strip()))

    if status == SUCCESS_STATUS and is_empty_payload(parsed, client_id_key=client_id_key):
        return Classification(Outcome.EMPTY_PAYLOAD, status)

    reply = extract_reply(parsed, client_id_key=client_id_key)
    if contains_incomplete_markers(reply):
        return Classification(Outcome.INCOMPLETE_MARKER, status, reply_text=reply)
    return Classification(Outcome.SUCCESS, status, reply_text=reply)


def is_empty_payload(parsed: PlainText | Structured, *, client_id_key: str = CLIENT_ID_KEY) -> bool:
    if not isinstance(parsed, Structured) or not isinstance(parsed.payload, dict):
        return False
    payload = parsed.payload
    field = _reply_field(payload)
    if field is not None:
        return _is_blank_value(payload[field])
    return not _meaningful_keys(payload, client_id_key)


def extract_reply(parsed: PlainText | Structured, *, client_id_key: str = CLIENT_ID_KEY) -> str:
    """Resolve the text shown to the user for a parsed body."""
    if isinstance(parsed, PlainText):
        return parsed.text.strip() or REPHRASE_FALLBACK

    payload = parsed.payload
    if isinstance(payload, dict):
        field = _reply_field(payload)
        if field is not None:
            value = payload[field]
            if _is_blank_value(value):
                return REPHRASE_FALLBACK
            return _stringify(value).strip() or REPHRASE_FALLBACK
        if not _meaningful_keys(payload, client_id_key):
            return EMPTY_OBJECT_FALLBACK
    return json.dumps(payload, ensure_ascii=False, indent=2)


def contains_incomplete_markers(text: str) -> bool:
    """Upstream tool output cut off mid-stream shows up as raw search results HTML."""
    lowered = text.lower()
    return all(marker in lowered for marker in INCOMPLETE_MARKERS)


def _reply_field(payload: dict[str, Any]) -> str | None:
    for name in REPLY_FIELDS:
        if name in payload:
            return name
    return None


def _meaningful_keys(payload: dict[str, Any], client_id_key: str) -> list[str]:
    return [key for key in payload if key != client_id_key]


def _is_blank_value(value: Any) -> bool:
    return value is None or value == ""


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict | list):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _error_detail(result: TransportResult) -> str:
    parsed = result.parsed
    if isinstance(parsed, PlainText):
        return _truncate(parsed.text.strip())
    if isinstance(parsed, Structured) and isinstance(parsed.payload, dict):
        for name in DETAIL_FIELDS:
            value = parsed.payload.get(name)
            if not _is_blank_value(value):
                return _truncate(_stringify(value).strip())
        return ""
    return _truncate(result.raw_body.strip())


def _truncate(text: str) -> str:
    if len(text) <= MAX_DETAIL_CHARS:
        return text
    return text[:MAX_DETAIL_CHARS] + "..."
