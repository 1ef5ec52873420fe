"""
Configuration Management Module
Handles loading and validation of environment variables and settings
"""

import os
from typing import Optional, Tuple
from dataclasses import dataclass
from dotenv import load_dotenv


class ConfigurationError(ValueError):
    """Raised when a required setting is missing or malformed"""


@dataclass
class GeminiConfig:
    """Configuration for the Gemini generateContent API"""
    api_key: Optional[str]
    model: str
    temperature: float
    max_output_tokens: int
    api_versions: Tuple[str, ...]
    base_url: str


@dataclass
class OpenAIConfig:
    """Configuration for the OpenAI chat completions API"""
    api_key: Optional[str]
    model: str
    temperature: float
    max_tokens: int
    base_url: str


@dataclass
class SystemConfig:
    """Configuration for system settings"""
    log_level: str
    log_dir: str
    request_timeout: int


class Config:
    """Main configuration class"""

    def __init__(self, env_file: str = ".env"):
        """
        Initialize configuration from environment file

        Args:
            env_file: Path to environment file (default: .env)
        """
        load_dotenv(env_file)

        self.gemini = self._load_gemini_config()
        self.openai = self._load_openai_config()
        self.system = self._load_system_config()

    def _load_gemini_config(self) -> GeminiConfig:
        """Load Gemini configuration"""
        return GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY") or None,
            model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            temperature=self._get_float("GEMINI_TEMPERATURE", 0.05),
            max_output_tokens=self._get_int("GEMINI_MAX_OUTPUT_TOKENS", 10),
            api_versions=self._parse_versions(os.getenv("GEMINI_API_VERSIONS", "v1,v1beta")),
            base_url=os.getenv(
                "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"
            ).rstrip("/"),
        )

    def _load_openai_config(self) -> OpenAIConfig:
        """Load OpenAI configuration"""
        return OpenAIConfig(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("OPENAI_MODEL", "gpt-3.5-turbo"),
            temperature=self._get_float("OPENAI_TEMPERATURE", 0.1),
            max_tokens=self._get_int("OPENAI_MAX_TOKENS", 100),
            base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        )

    def _load_system_config(self) -> SystemConfig:
        """Load system configuration"""
        return SystemConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            request_timeout=self._get_int("REQUEST_TIMEOUT", 30),
        )

    @staticmethod
    def _parse_versions(value: str) -> Tuple[str, ...]:
        """Normalize a comma separated API version list, keeping its order."""
        versions = tuple(
            version.strip()
            for version in value.replace("\n", ",").split(",")
            if version.strip()
        )
        return versions or ("v1", "v1beta")

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Read an integer environment variable"""
        value = os.getenv(key)
        if value is None or value.strip() == "":
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got '{value}'")

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Read a float environment variable"""
        value = os.getenv(key)
        if value is None or value.strip() == "":
            return default
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got '{value}'")

    def require_gemini_key(self) -> str:
        """
        Return the Gemini API key

        Raises:
            ConfigurationError: If GEMINI_API_KEY is not set
        """
        if not self.gemini.api_key:
            raise ConfigurationError("GEMINI_API_KEY not found in .env file")
        return self.gemini.api_key

    def require_openai_key(self) -> str:
        """
        Return the OpenAI API key

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if not self.openai.api_key:
            raise ConfigurationError("OPENAI_API_KEY not found in .env file")
        return self.openai.api_key

    def validate(self) -> bool:
        """
        Validate configuration

        Returns:
            True if configuration is valid

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not 0.0 <= self.gemini.temperature <= 2.0:
            raise ConfigurationError("GEMINI_TEMPERATURE must be between 0.0 and 2.0")

        if not 0.0 <= self.openai.temperature <= 2.0:
            raise ConfigurationError("OPENAI_TEMPERATURE must be between 0.0 and 2.0")

        if self.gemini.max_output_tokens <= 0 or self.openai.max_tokens <= 0:
            raise ConfigurationError("Token limits must be positive")

        if self.system.request_timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT must be positive")

        return True
