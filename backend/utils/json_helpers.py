import json
import math
from typing import Any


def extract_assistant_content(data: Any) -> str:
    """Return choices[0].message.content, or "" if any part of that path is missing."""
    choices = data.get("choices") if isinstance(data, dict) else None
    first = choices[0] if isinstance(choices, list) and choices else None
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(text: str) -> float | None:
    # Overflowing literals such as 1e400 become null
    value = float(text)
    return value if math.isfinite(value) else None


def parse_json_from_text(raw: str) -> Any:
    """Parse JSON starting at the first "{" in raw, or all of raw if there is none.

    NaN and Infinity are rejected, so the result can always be re-serialized.
    Raises ValueError (json.JSONDecodeError for malformed text) on failure.
    """
    start = raw.find("{")
    text = raw[start:] if start >= 0 else raw
    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
