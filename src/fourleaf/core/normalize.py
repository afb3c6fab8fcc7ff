"""Question text normalization before transmission."""

from __future__ import annotations

import re

TRAILING_QUESTION_RE = re.compile(r"[?？]\s*$")
INTERIOR_QUESTION_RE = re.compile(r"[?？](?=.)", re.DOTALL)


def normalize_question(text: str) -> str:
    """Split multi-part questions into lines and drop the trailing question mark.

    ``"A? B? C"`` becomes ``"A\\nB\\nC"`` and ``"A?"`` becomes ``"A"``.
    """
    result = TRAILING_QUESTION_RE.sub("", text, count=1)
    result = INTERIOR_QUESTION_RE.sub("\n", result)
    lines = (line.strip() for line in result.splitlines())
    return "\n".join(line for line in lines if line)
