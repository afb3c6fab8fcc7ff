"""Decode chat endpoint response bodies."""

from __future__ import annotations

import json

from fourleaf.core.types import ParsedBody, PlainText, Structured, Unparseable


def decode_body(raw: str) -> ParsedBody:
    """Decode a raw response body into a tagged payload.

    An empty body counts as an empty object. JSON scalars other than strings
    carry no reply text and decode to an empty ``PlainText``.
    """
    if not raw:
        return Structured({})
    try:
        data = json.loads(raw)
    except ValueError:
        return Unparseable(raw)

    if isinstance(data, str):
        return PlainText(data)
    if isinstance(data, dict | list):
        return Structured(data)
    return PlainText("")
