"""
Sanitization Utility Module
Provides functions to sanitize inputs for safe logging and display.
"""

import re
import unicodedata

# Query parameters that carry credentials (Gemini passes its key as ?key=...)
_SECRET_QUERY_PARAM = re.compile(
    r'([?&](?:key|api_key|apikey|token|access_token)=)[^&#\s"\'<>]+',
    re.IGNORECASE,
)
_BEARER_TOKEN = re.compile(r'(Bearer\s+)[A-Za-z0-9\-\._~\+/]+=*', re.IGNORECASE)
_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


def sanitize_for_logging(text: str, max_length: int = 255) -> str:
    """
    Sanitize text for safe logging to prevent Log Injection (CRLF) and terminal manipulation.

    Args:
        text: The input string to sanitize.
        max_length: Maximum allowed length for the log entry (truncates if longer).

    Returns:
        Sanitized string safe for logging.
    """
    if not text:
        return ""

    text = unicodedata.normalize('NFKC', text)

    text = text.replace('\n', '\\n').replace('\r', '\\r')

    # Model output is echoed to the terminal, strip cursor/color sequences
    text = _ANSI_ESCAPE.sub('', text)

    text = "".join(ch for ch in text if ch == '\t' or ord(ch) >= 32)

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text


def redact_secrets(text: str) -> str:
    """
    Redact API keys embedded in URLs or Authorization headers.

    requests puts the full URL (including ``?key=...``) into its exception
    messages, so every error string goes through here before it is logged.
    """
    if not text:
        return ""
    text = _SECRET_QUERY_PARAM.sub(r'\1[REDACTED]', text)
    return _BEARER_TOKEN.sub(r'\1[REDACTED]', text)


def mask_api_key(api_key: str) -> str:
    """
    Mask an API key for display: first four and last four characters kept.

    >>> mask_api_key("sk-abcdefghijklmnop")
    'sk-a**********mnop (19 chars)'
    """
    if not api_key or len(api_key) < 8:
        return "Invalid key (too short)"

    masked_portion = "*" * min(len(api_key) - 8, 10)
    return f"{api_key[:4]}{masked_portion}{api_key[-4:]} ({len(api_key)} chars)"


def short_key_hint(api_key: str) -> str:
    """Compact ``abc...xyz`` hint used in run logs."""
    if not api_key:
        return ""
    if len(api_key) <= 6:
        return "..."
    return f"{api_key[:3]}...{api_key[-3:]}"
