#!/usr/bin/env python3
"""
Classify sample emails with OpenAI and report pass/fail against the expected yes/no answer.
Writes a timestamped log under LOG_DIR (default: logs/).
"""

import argparse
import os
import sys

# Add the project root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from invoice_diagnostics.app_runner import run_openai_check


def main():
    parser = argparse.ArgumentParser(description="Run the OpenAI invoice detection check.")
    parser.add_argument("--env-file", default=".env", help="Environment file with the API key (default: .env)")
    args = parser.parse_args()

    return run_openai_check(args.env_file)


if __name__ == "__main__":
    sys.exit(main())
