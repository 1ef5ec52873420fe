"""
Errors raised by the provider clients
"""

from typing import Any, Optional

import requests

from ..utils.sanitization import redact_secrets


class APIError(Exception):
    """A provider call failed (transport error, HTTP error status or bad body)"""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(redact_secrets(message))
        self.status_code = status_code
        self.details = details

    @property
    def message(self) -> str:
        return str(self)


class GeminiAPIError(APIError):
    pass


class OpenAIAPIError(APIError):
    pass


def response_details(response: requests.Response) -> Any:
    """Decoded error body of a provider response, falling back to raw text"""
    try:
        return response.json()
    except ValueError:
        return response.text


def error_from_response(response: requests.Response, error_cls=APIError) -> APIError:
    """Build an APIError for a non-2xx response"""
    reason = getattr(response, "reason", "") or ""
    message = f"Request failed with status code {response.status_code}"
    if reason:
        message = f"{message} ({reason})"
    return error_cls(message, status_code=response.status_code, details=response_details(response))


def wrap_exception(exc: Exception, error_cls=APIError) -> APIError:
    """Normalize any failure of a provider call into ``error_cls``"""
    if isinstance(exc, error_cls):
        return exc
    if isinstance(exc, APIError):
        return error_cls(exc.message, status_code=exc.status_code, details=exc.details)

    status_code = None
    details = None
    response = getattr(exc, "response", None)
    if response is not None:
        status_code = response.status_code
        details = response_details(response)
    return error_cls(str(exc), status_code=status_code, details=details)
