#!/usr/bin/env python3
"""
List the Gemini models available to GEMINI_API_KEY.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from invoice_diagnostics.app_runner import run_model_listing


def main():
    parser = argparse.ArgumentParser(description="List available Gemini models.")
    parser.add_argument("--env-file", default=".env")
    parser.add_argument("--api-version", default="v1", help="API version to query (v1 or v1beta)")
    args = parser.parse_args()

    return run_model_listing(args.env_file, args.api_version)


if __name__ == "__main__":
    sys.exit(main())
