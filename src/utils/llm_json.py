"""Pull a JSON object out of a free-form LLM response.

Models wrap JSON in markdown fences or chat around it ("Here is the
result: {...}").  Every AI-backed component goes through
:func:`extract_json_object`, and any failure it raises is treated by the
callers as a provider failure.
"""

from __future__ import annotations

import json
import re
from typing import Any

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


def extract_json_object(response: str) -> dict[str, Any]:
    """Return the JSON object contained in *response*.

    Parameters
    ----------
    response:
        Raw text returned by the model.

    Returns
    -------
    dict[str, Any]
        The decoded object.

    Raises
    ------
    ValueError
        If no JSON object can be located or decoded (``json.JSONDecodeError``
        is a ``ValueError`` subclass).
    """
    text = (response or "").strip()

    # --- Strategy 1: fenced block ---
    fence_match = _JSON_FENCE_RE.search(text)
    if fence_match:
        text = fence_match.group(1).strip()

    # --- Strategy 2: outermost braces ---
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in AI response")
    text = text[start : end + 1]

    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError("AI response is not a JSON object")
    return parsed
