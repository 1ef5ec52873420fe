"""
Gemini Invoice Classifier
Calls the generateContent endpoint, falling back across API versions, and
turns the free-text answer into a confidence score
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..utils.config import ConfigurationError, GeminiConfig
from ..utils.sanitization import redact_secrets, sanitize_for_logging
from .api_errors import APIError, GeminiAPIError, error_from_response, wrap_exception
from .classification import ClassificationResult, KeyCheckResult
from .email_samples import EmailMetadata
from .prompts import KEY_CHECK_PROMPT_GEMINI, format_metadata_prompt
from .response_parsing import (
    ResponseFormatError,
    extract_confidence,
    first_number,
    gemini_text,
)


@dataclass
class GenerationResult:
    """Text and raw body of a successful generateContent call"""
    text: str
    data: Dict[str, Any]
    api_version: str
    status_code: int


@dataclass
class ModelInfo:
    """Entry of the models listing"""
    name: str
    description: str = ""
    supported_generation_methods: List[str] = field(default_factory=list)


class GeminiClient:
    """Client for the Generative Language API"""

    def __init__(self, config: GeminiConfig, timeout: int = 30):
        """
        Initialize the client

        Args:
            config: GeminiConfig object
            timeout: Seconds to wait for each HTTP call
        """
        self.config = config
        self.timeout = timeout
        self.logger = logging.getLogger("GeminiClient")

    @property
    def api_key(self) -> str:
        if not self.config.api_key:
            raise ConfigurationError("GEMINI_API_KEY not found in .env file")
        return self.config.api_key

    def endpoint(self, api_version: str, method: str = "generateContent") -> str:
        """URL of a model method for the given API version (key excluded)"""
        return f"{self.config.base_url}/{api_version}/models/{self.config.model}:{method}"

    def build_payload(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.temperature if temperature is None else temperature,
                "maxOutputTokens": (
                    self.config.max_output_tokens if max_output_tokens is None else max_output_tokens
                ),
            },
        }

    def _post(self, api_version: str, payload: Dict[str, Any], api_key: str) -> requests.Response:
        response = requests.post(
            self.endpoint(api_version),
            params={"key": api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        if not response.ok:
            raise error_from_response(response, GeminiAPIError)
        return response

    def _log_failure(self, api_version: str, error: APIError, level: int, also: bool) -> None:
        prefix = f"{api_version} API call also failed" if also else f"{api_version} API call failed"
        self.logger.log(level, "%s: %s", prefix, error.message)
        if error.status_code is not None:
            self.logger.log(level, "%s Response status: %s", api_version, error.status_code)
        if error.details is not None:
            self.logger.log(
                level,
                "%s Response data: %s",
                api_version,
                redact_secrets(json.dumps(error.details, indent=2, default=str)),
            )

    def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> GenerationResult:
        """
        Run generateContent, trying each configured API version in order.

        A later version is only tried after the previous one failed. When all
        of them fail, the error of the last attempt is raised.

        Raises:
            GeminiAPIError: If every API version failed
            ConfigurationError: If no API key is configured
        """
        api_key = self.api_key
        payload = self.build_payload(prompt, temperature, max_output_tokens)
        versions = list(self.config.api_versions)
        last_error: Optional[GeminiAPIError] = None

        for index, api_version in enumerate(versions):
            if index > 0:
                self.logger.info("Falling back to %s API endpoint...", api_version)
            self.logger.info("Trying %s API endpoint with model: %s", api_version, self.config.model)

            try:
                response = self._post(api_version, payload, api_key)
                data = response.json()
                text = gemini_text(data)
            except (requests.RequestException, APIError, ResponseFormatError, ValueError) as e:
                last_error = wrap_exception(e, GeminiAPIError)
                is_last = index == len(versions) - 1
                self._log_failure(
                    api_version,
                    last_error,
                    logging.ERROR if is_last else logging.WARNING,
                    also=index > 0,
                )
                continue

            self.logger.info("API call successful (%s API)", api_version)
            self.logger.info("Response status: %s", response.status_code)
            self.logger.info("Response data: %s", json.dumps(data, indent=2))
            self.logger.info('Response text: "%s"', sanitize_for_logging(text))
            return GenerationResult(text, data, api_version, response.status_code)

        if last_error is None:
            raise GeminiAPIError("No Gemini API versions configured")
        raise last_error

    def classify_prompt(self, prompt: str) -> ClassificationResult:
        """
        Ask for an invoice confidence score for a ready-made prompt.

        Never raises for provider failures: they become a result with
        ``success=False``.
        """
        self.logger.info("Making API call to Gemini...")
        try:
            generation = self.generate(prompt)
        except APIError as e:
            self.logger.error("API call failed: %s", e.message)
            return ClassificationResult.failure(e.message, e.details)

        confidence = extract_confidence(generation.text)
        if confidence is not None:
            self.logger.info("Confidence score: %s", confidence)
        elif first_number(generation.text) is not None:
            self.logger.warning("Invalid confidence score: %s", first_number(generation.text))
        else:
            self.logger.warning(
                'Could not extract confidence score from response: "%s"',
                sanitize_for_logging(generation.text),
            )

        return ClassificationResult(
            success=True,
            confidence=confidence,
            raw_response=generation.data,
            api_version=generation.api_version,
        )

    def classify_metadata(self, metadata: EmailMetadata) -> ClassificationResult:
        return self.classify_prompt(format_metadata_prompt(metadata))

    def list_models(self, api_version: str = "v1") -> List[ModelInfo]:
        """
        List the models available to this key

        Raises:
            GeminiAPIError: If the request fails
        """
        api_key = self.api_key
        try:
            response = requests.get(
                f"{self.config.base_url}/{api_version}/models",
                params={"key": api_key},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            if not response.ok:
                raise error_from_response(response, GeminiAPIError)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise wrap_exception(e, GeminiAPIError) from e

        return [
            ModelInfo(
                name=model.get("name", ""),
                description=model.get("description", ""),
                supported_generation_methods=list(model.get("supportedGenerationMethods", [])),
            )
            for model in data.get("models", [])
        ]

    def verify_key(self) -> KeyCheckResult:
        """Send a trivial prompt to check that the key is accepted"""
        try:
            generation = self.generate(KEY_CHECK_PROMPT_GEMINI, temperature=0.05, max_output_tokens=10)
        except APIError as e:
            return KeyCheckResult("Gemini", False, error=e.message, details=e.details)

        return KeyCheckResult(
            "Gemini",
            True,
            response_text=generation.text,
            api_version=generation.api_version,
        )
