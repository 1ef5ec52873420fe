"""
Parsing helpers for free-text model output
"""

import math
import re
from typing import Any, Dict, Optional

# A standalone number: not part of a word, an identifier like "#12345", or a
# negative value. A decimal comma ("0,9") is read as a decimal point.
CONFIDENCE_PATTERN = re.compile(r'(?<![\w.#\-])(\d+(?:[.,]\d+)?|[.,]\d+)(?!\w)')


class ResponseFormatError(ValueError):
    """Raised when a provider response lacks the expected text field"""


def extract_confidence(text: str) -> Optional[float]:
    """
    Extract a confidence score in [0, 1] from model output.

    Only the first standalone number is considered. A missing number, or a
    first number outside [0, 1], yields ``None`` rather than an error.

    >>> extract_confidence("0.85")
    0.85
    >>> extract_confidence("Invoice #12345, confidence 0.9")
    0.9
    >>> extract_confidence("85") is None
    True
    """
    if not text:
        return None

    match = CONFIDENCE_PATTERN.search(text)
    if not match:
        return None

    try:
        value = float(match.group(1).replace(",", "."))
    except ValueError:
        return None

    if math.isnan(value) or not 0.0 <= value <= 1.0:
        return None
    return value


def first_number(text: str) -> Optional[str]:
    """Return the first standalone numeric token, used for diagnostics"""
    match = CONFIDENCE_PATTERN.search(text or "")
    return match.group(1) if match else None


def is_affirmative(text: str) -> bool:
    """True when the response text contains "yes", ignoring case"""
    return "yes" in (text or "").lower()


def gemini_text(data: Dict[str, Any]) -> str:
    """Text of the first candidate of a generateContent response"""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"].strip()
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ResponseFormatError(f"Unexpected Gemini response format: {e!r}") from e


def openai_text(data: Dict[str, Any]) -> str:
    """Message content of the first choice of a chat completion"""
    try:
        return data["choices"][0]["message"]["content"].strip()
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ResponseFormatError(f"Unexpected OpenAI response format: {e!r}") from e
