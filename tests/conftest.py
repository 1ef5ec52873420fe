"""Pytest configuration.

The application package `invoice_diagnostics/` lives at the repository root.
Depending on how pytest is invoked and the active import mode, the root may
not be on `sys.path`, so it is added explicitly during collection.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Runs reconfigure the root logger; close their file handlers afterwards."""
    from invoice_diagnostics.utils.logging_utils import RunLogFormatter

    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if not isinstance(handler.formatter, RunLogFormatter):
            continue
        root.removeHandler(handler)
        handler.close()
