"""
Response sanitizer - isolates the JSON object in free-form model output.

Models wrap JSON in ```json fences and surround it with prose; this module
strips both before parsing.
"""

import json
import re
from typing import Any, Dict, Optional

from ...error_handling import ExtractionParseError


FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """
    Remove a fenced-code-block wrapper.

    Returns the contents of the first fenced block when there is one,
    otherwise the text with any stray fence markers removed.
    """
    match = FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return re.sub(r"```(?:json|JSON)?", "", text).strip()


def isolate_json_object(text: str) -> Optional[str]:
    """Slice from the first '{' to the last '}', or None if there is no object."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start:end + 1]


def parse_model_json(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse the JSON object contained in a model response.

    Args:
        text: Raw model output

    Returns:
        Parsed JSON object

    Raises:
        ExtractionParseError: If no JSON object can be read
    """
    if not text or not text.strip():
        raise ExtractionParseError("Empty model response", raw_text=text)

    candidate = isolate_json_object(strip_code_fences(text.strip()))
    if candidate is None:
        raise ExtractionParseError("No JSON object in model response", raw_text=text)

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ExtractionParseError(f"Malformed JSON in model response: {e}", raw_text=text) from e

    if not isinstance(payload, dict):
        raise ExtractionParseError("Model response is not a JSON object", raw_text=text)
    return payload
