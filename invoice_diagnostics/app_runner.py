"""
Entry points of the diagnostic scripts.
Each function runs one script end to end and returns its exit code.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from invoice_diagnostics.modules.api_errors import APIError
from invoice_diagnostics.modules.classification import KeyCheckResult
from invoice_diagnostics.modules.diagnostic_run import DiagnosticRun, gemini_cases, openai_cases
from invoice_diagnostics.modules.gemini_client import GeminiClient
from invoice_diagnostics.modules.openai_client import OpenAIClient
from invoice_diagnostics.utils.colors import Colors
from invoice_diagnostics.utils.config import Config, ConfigurationError
from invoice_diagnostics.utils.git_secrets import GitSecretsError, setup_git_secrets
from invoice_diagnostics.utils.logging_utils import setup_run_logging
from invoice_diagnostics.utils.sanitization import mask_api_key, redact_secrets, short_key_hint
from invoice_diagnostics.utils.setup_wizard import API_KEY_VARIABLES, run_setup_wizard


def _load_config(env_file: str) -> Config:
    try:
        config = Config(env_file)
        config.validate()
    except ConfigurationError as e:
        print(Colors.error(f"Configuration error: {e}"), file=sys.stderr)
        sys.exit(1)
    return config


def _exit_missing_key(error: ConfigurationError, provider: str, variable: str) -> None:
    print(Colors.error(f"Error: {error}"), file=sys.stderr)
    print(f"Please add your {provider} API key to the .env file:")
    print(f"{variable}=your_api_key_here")
    sys.exit(1)


def _run_cases(name: str, prefix: str, config: Config, api_key: str, classify, cases) -> int:
    log_path = setup_run_logging(prefix, config.system.log_dir, config.system.log_level)
    logger = logging.getLogger("Diagnostics")

    logger.info("Starting %s", name)
    logger.info("API Key: %s", short_key_hint(api_key))

    try:
        DiagnosticRun(name, classify, cases, log_path).run()
    except Exception as e:
        logger.error("Test failed with error: %s", redact_secrets(str(e)), exc_info=True)
        return 1
    return 0


def run_gemini_check(env_file: str = ".env") -> int:
    """Classify the metadata samples with Gemini (exits 1 when GEMINI_API_KEY is missing)"""
    config = _load_config(env_file)
    try:
        api_key = config.require_gemini_key()
    except ConfigurationError as e:
        _exit_missing_key(e, "Gemini", "GEMINI_API_KEY")

    client = GeminiClient(config.gemini, timeout=config.system.request_timeout)
    return _run_cases(
        "Gemini API integration test",
        "gemini-test",
        config,
        api_key,
        client.classify_prompt,
        gemini_cases(),
    )


def run_openai_check(env_file: str = ".env") -> int:
    """Classify the content samples with OpenAI (exits 1 when OPENAI_API_KEY is missing)"""
    config = _load_config(env_file)
    try:
        api_key = config.require_openai_key()
    except ConfigurationError as e:
        _exit_missing_key(e, "OpenAI", "OPENAI_API_KEY")

    client = OpenAIClient(config.openai, timeout=config.system.request_timeout)
    return _run_cases(
        "OpenAI API integration test",
        "openai-test",
        config,
        api_key,
        client.classify_prompt,
        openai_cases(),
    )


def _check_key(label: str, color: str, api_key: Optional[str], verify) -> KeyCheckResult:
    print(Colors.colorize(f"\n🔑 Testing {label} API Key...", color))

    if not api_key:
        print(Colors.error(f"❌ {label} API key not found in .env file"))
        return KeyCheckResult(label, False, error="not found")

    print(Colors.colorize(f"📝 Found {label} API key: {mask_api_key(api_key)}", Colors.BLUE))

    result = verify()
    if result.valid:
        suffix = f" (using {result.api_version} API)" if result.api_version else ""
        print(Colors.success(f'✅ {label} API key is valid! Response: "{result.response_text}"{suffix}'))
    else:
        print(Colors.error(f"❌ {label} API test failed: {result.error}"))
        if result.details is not None:
            print(Colors.error(f"Error details: {redact_secrets(str(result.details))}"))
    return result


def run_key_verification(env_file: str = ".env", interactive: Optional[bool] = None) -> int:
    """
    Verify both API keys with a minimal request each.

    A missing key is reported as invalid rather than aborting the run. When
    attached to a terminal, missing keys can be entered through the wizard.
    """
    print(Colors.header("🔍 API Key Verification Tool 🔍"))
    print(Colors.header("================================"))

    config = _load_config(env_file)

    if interactive is None:
        interactive = sys.stdin.isatty()
    missing = {
        variable: provider
        for variable, provider in API_KEY_VARIABLES.items()
        if not getattr(config, provider.lower()).api_key
    }
    if missing and interactive and run_setup_wizard(env_file, missing):
        config = _load_config(env_file)

    timeout = config.system.request_timeout
    openai_result = _check_key(
        "OpenAI",
        Colors.CYAN,
        config.openai.api_key,
        OpenAIClient(config.openai, timeout=timeout).verify_key,
    )
    gemini_result = _check_key(
        "Gemini",
        Colors.MAGENTA,
        config.gemini.api_key,
        GeminiClient(config.gemini, timeout=timeout).verify_key,
    )

    print(Colors.header("\n📋 Summary:"))
    print(Colors.header("================================"))
    for result in (openai_result, gemini_result):
        status = "PASS" if result.valid else "FAIL"
        state = "Valid" if result.valid else "Invalid or not found"
        print(Colors.colorize(
            f"{Colors.get_verdict_symbol(status)} {result.provider} API key: {state}",
            Colors.get_verdict_color(status),
        ))

    print(Colors.warning("\n💡 Tip: Make sure your API keys are correctly set in the .env file:"))
    print(Colors.warning("OPENAI_API_KEY=your_openai_key"))
    print(Colors.warning("GEMINI_API_KEY=your_gemini_key"))

    return 0 if openai_result.valid and gemini_result.valid else 1


def run_model_listing(env_file: str = ".env", api_version: str = "v1") -> int:
    """Print the Gemini models available to the configured key"""
    config = _load_config(env_file)
    try:
        config.require_gemini_key()
    except ConfigurationError as e:
        print(Colors.error(f"Error: {e}"), file=sys.stderr)
        return 1

    client = GeminiClient(config.gemini, timeout=config.system.request_timeout)
    try:
        models = client.list_models(api_version)
    except APIError as e:
        print(Colors.error(f"❌ Error fetching models: {e.message}"))
        if e.details is not None:
            print(Colors.error(redact_secrets(str(e.details))))
        return 1

    print(Colors.success("✅ Available models:"))
    for index, model in enumerate(models, start=1):
        print(f"\n{index}. {model.name}")
        if model.description:
            print(f"   📘 {model.description}")
        if model.supported_generation_methods:
            print(f"   ⚙️ Supported methods: {', '.join(model.supported_generation_methods)}")
    return 0


def run_git_secrets_setup(repo_dir: Optional[str] = None) -> int:
    """Install the git-secrets hook and register the repository patterns"""
    try:
        setup_git_secrets(Path(repo_dir) if repo_dir else None)
    except GitSecretsError as e:
        print(Colors.error(str(e)))
        return 1

    print(Colors.success("git-secrets has been configured for this repository."))
    print("The pre-commit hook will now check for secrets before each commit.")
    return 0
