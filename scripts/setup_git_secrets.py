#!/usr/bin/env python3
"""
Set up git-secrets for this repository: installs the hooks, adds the
patterns from .git-secrets-patterns and the allowed patterns from .gitallowed.
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from invoice_diagnostics.app_runner import run_git_secrets_setup

logging.basicConfig(level=logging.INFO, format='%(message)s')


def main():
    parser = argparse.ArgumentParser(description="Configure git-secrets pre-commit checks.")
    parser.add_argument("repo", nargs="?", default=None, help="Repository root (default: current directory)")
    args = parser.parse_args()

    return run_git_secrets_setup(args.repo)


if __name__ == "__main__":
    sys.exit(main())
