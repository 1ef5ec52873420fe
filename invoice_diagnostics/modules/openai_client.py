"""
OpenAI Invoice Classifier
Asks a chat completion model for a yes/no invoice answer
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..utils.config import ConfigurationError, OpenAIConfig
from ..utils.sanitization import sanitize_for_logging
from .api_errors import APIError, OpenAIAPIError, error_from_response, wrap_exception
from .classification import ClassificationResult, KeyCheckResult
from .email_samples import EmailContent
from .prompts import (
    INVOICE_SYSTEM_PROMPT,
    KEY_CHECK_SYSTEM_PROMPT_OPENAI,
    KEY_CHECK_USER_PROMPT_OPENAI,
    format_content_prompt,
)
from .response_parsing import ResponseFormatError, is_affirmative, openai_text


class OpenAIClient:
    """Client for the chat completions endpoint"""

    def __init__(self, config: OpenAIConfig, timeout: int = 30):
        self.config = config
        self.timeout = timeout
        self.logger = logging.getLogger("OpenAIClient")

    @property
    def api_key(self) -> str:
        if not self.config.api_key:
            raise ConfigurationError("OPENAI_API_KEY not found in .env file")
        return self.config.api_key

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url}/chat/completions"

    def build_payload(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature if temperature is None else temperature,
            "max_tokens": self.config.max_tokens if max_tokens is None else max_tokens,
        }

    def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Run one chat completion

        Returns:
            Tuple of (stripped response text, raw response body)

        Raises:
            OpenAIAPIError: On transport errors, error statuses or malformed bodies
            ConfigurationError: If no API key is configured
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(messages, temperature, max_tokens)

        self.logger.info("Using model: %s", self.config.model)
        try:
            response = requests.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
            if not response.ok:
                raise error_from_response(response, OpenAIAPIError)
            data = response.json()
            text = openai_text(data)
        except (requests.RequestException, ResponseFormatError, ValueError) as e:
            raise wrap_exception(e, OpenAIAPIError) from e

        self.logger.info("API call successful")
        self.logger.info("Response status: %s", response.status_code)
        self.logger.info("Response data: %s", json.dumps(data, indent=2))
        return text, data

    def classify_prompt(self, prompt: str) -> ClassificationResult:
        """
        Ask whether an email prompt describes an invoice.

        Provider failures become a result with ``success=False``.
        """
        self.logger.info("Making API call to OpenAI...")
        messages = [
            {"role": "system", "content": INVOICE_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        try:
            text, data = self.complete(messages)
        except APIError as e:
            self.logger.error("API call failed: %s", e.message)
            if e.status_code is not None:
                self.logger.error("Response status: %s", e.status_code)
            if e.details is not None:
                self.logger.error("Response data: %s", json.dumps(e.details, indent=2, default=str))
            return ClassificationResult.failure(e.message, e.details)

        response_text = text.lower()
        self.logger.info('Response text: "%s"', sanitize_for_logging(response_text))

        is_invoice = is_affirmative(response_text)
        self.logger.info("Is invoice: %s", is_invoice)

        return ClassificationResult(success=True, is_invoice=is_invoice, raw_response=data)

    def classify_email(self, content: EmailContent) -> ClassificationResult:
        return self.classify_prompt(format_content_prompt(content))

    def verify_key(self) -> KeyCheckResult:
        """Send a trivial yes/no question to check that the key is accepted"""
        messages = [
            {"role": "system", "content": KEY_CHECK_SYSTEM_PROMPT_OPENAI},
            {"role": "user", "content": KEY_CHECK_USER_PROMPT_OPENAI},
        ]
        try:
            text, _ = self.complete(messages, temperature=0.05, max_tokens=10)
        except APIError as e:
            return KeyCheckResult("OpenAI", False, error=e.message, details=e.details)
        return KeyCheckResult("OpenAI", True, response_text=text)
