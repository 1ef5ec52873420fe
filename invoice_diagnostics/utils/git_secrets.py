"""
git-secrets Setup Helper
Installs the git-secrets pre-commit hook and registers the repository's
prohibited and allowed patterns.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

PATTERNS_FILE = ".git-secrets-patterns"
ALLOWED_FILE = ".gitallowed"

INSTALL_HINTS = [
    "For macOS: brew install git-secrets",
    "For other systems: https://github.com/awslabs/git-secrets#installing-git-secrets",
]

logger = logging.getLogger("GitSecrets")


class GitSecretsError(RuntimeError):
    """Raised when git-secrets is unavailable or one of its commands fails"""


def read_patterns(path: Path) -> List[str]:
    """
    Read prohibited patterns, one per line.

    Lines starting with ``#`` and empty lines are skipped; a final line
    without a trailing newline is still read.
    """
    patterns = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f.read().splitlines():
            if line and not line.startswith("#"):
                patterns.append(line)
    return patterns


def _run(args: Sequence[str], cwd: Path) -> None:
    try:
        subprocess.run(list(args), cwd=str(cwd), check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitSecretsError(f"{' '.join(args)} failed: {stderr or e}") from e


def setup_git_secrets(repo_dir: Optional[Path] = None) -> List[str]:
    """
    Configure git-secrets for ``repo_dir``.

    Returns:
        The patterns that were registered

    Raises:
        GitSecretsError: If git-secrets is not installed, the patterns file
            is missing, or a git-secrets command fails
    """
    repo_dir = Path(repo_dir or Path.cwd())

    if shutil.which("git-secrets") is None:
        raise GitSecretsError(
            "git-secrets is not installed. Please install it first.\n" + "\n".join(INSTALL_HINTS)
        )

    patterns_path = repo_dir / PATTERNS_FILE
    if not patterns_path.exists():
        raise GitSecretsError(f"Patterns file not found: {patterns_path}")

    try:
        _run(["git-secrets", "--install"], repo_dir)
    except GitSecretsError as e:
        if "already exists" not in str(e):
            raise
        logger.warning("git-secrets hooks already installed, keeping them: %s", e)

    logger.info("Adding patterns from %s...", PATTERNS_FILE)
    patterns = read_patterns(patterns_path)
    for pattern in patterns:
        _run(["git-secrets", "--add", pattern], repo_dir)
        logger.info("Added pattern: %s", pattern)

    if (repo_dir / ALLOWED_FILE).exists():
        logger.info("Adding allowed patterns from %s...", ALLOWED_FILE)
        _run(["git-secrets", "--add-provider", "--", "cat", ALLOWED_FILE], repo_dir)

    return patterns
