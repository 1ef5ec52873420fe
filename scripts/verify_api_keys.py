#!/usr/bin/env python3
"""
Verify the OpenAI and Gemini API keys from .env with one minimal request each.

Usage:
    python scripts/verify_api_keys.py [--env-file .env] [--no-wizard]
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from invoice_diagnostics.app_runner import run_key_verification


def main():
    parser = argparse.ArgumentParser(description="Verify API keys for Gemini and OpenAI.")
    parser.add_argument("--env-file", default=".env", help="Environment file (default: .env)")
    parser.add_argument("--no-wizard", action="store_true", help="Never prompt for missing keys")
    args = parser.parse_args()

    return run_key_verification(args.env_file, interactive=False if args.no_wizard else None)


if __name__ == "__main__":
    sys.exit(main())
