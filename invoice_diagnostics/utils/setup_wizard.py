"""
Interactive setup wizard for API keys.
Stores the keys the diagnostics need in the .env file.
"""

import getpass
from typing import Dict

from dotenv import set_key

from .colors import Colors

API_KEY_VARIABLES = {
    "OPENAI_API_KEY": "OpenAI",
    "GEMINI_API_KEY": "Gemini",
}


def run_setup_wizard(config_file: str, missing: Dict[str, str]) -> bool:
    """
    Ask for each missing API key and save it to ``config_file``

    Args:
        config_file: Path of the .env file to update
        missing: Environment variable name -> provider label

    Returns:
        True if at least one key was saved
    """
    print(f"\n{Colors.CYAN}🔧 API Key Setup{Colors.RESET}")
    print(f"{Colors.GREY}Keys are stored in {config_file} and never printed back.{Colors.RESET}\n")

    saved = False
    for variable, provider in missing.items():
        if not _confirm(f"Configure {provider} API key?"):
            continue
        value = getpass.getpass(f"  {Colors.BOLD}{variable}:{Colors.RESET} ").strip()
        if not value:
            continue
        try:
            _update_env(config_file, variable, value)
            print(f"  {Colors.GREEN}✔ {provider} key saved{Colors.RESET}\n")
            saved = True
        except OSError as e:
            print(f"  {Colors.RED}❌ Error saving configuration: {e}{Colors.RESET}\n")

    return saved


def _confirm(question: str) -> bool:
    """Ask a yes/no question"""
    try:
        response = input(f"{question} [Y/n] ").strip().lower()
        return response in ('', 'y', 'yes')
    except EOFError:
        return False


def _update_env(file: str, key: str, value: str):
    """Update a key in the .env file"""
    set_key(file, key, value, quote_mode="auto")
