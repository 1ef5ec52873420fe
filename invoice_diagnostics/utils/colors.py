"""
ANSI color codes for the diagnostic console output
"""

import os


class Colors:
    """ANSI color codes and helper methods"""
    RESET = "\033[0m"
    BOLD = "\033[1m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    GREY = "\033[90m"

    # Verdict status -> (color, symbol)
    VERDICT_STYLES = {
        "PASS": (GREEN, "✅"),
        "FAIL": (RED, "❌"),
        "ERROR": (RED, "❌"),
        "INFO": (CYAN, "ℹ️"),
    }

    @staticmethod
    def supports_color(stream) -> bool:
        """True when ``stream`` is a terminal and NO_COLOR is not set"""
        if os.environ.get("NO_COLOR"):
            return False
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    @classmethod
    def colorize(cls, text: str, color: str) -> str:
        """Wrap text in color codes"""
        return f"{color}{text}{cls.RESET}"

    @classmethod
    def header(cls, text: str) -> str:
        """Format as a header (Bold Cyan)"""
        return f"{cls.BOLD}{cls.CYAN}{text}{cls.RESET}"

    @classmethod
    def warning(cls, text: str) -> str:
        return f"{cls.YELLOW}{text}{cls.RESET}"

    @classmethod
    def error(cls, text: str) -> str:
        return f"{cls.RED}{text}{cls.RESET}"

    @classmethod
    def success(cls, text: str) -> str:
        return f"{cls.GREEN}{text}{cls.RESET}"

    @classmethod
    def get_verdict_color(cls, status: str) -> str:
        """Get color code for a verdict status (PASS, FAIL, ERROR, INFO)"""
        return cls.VERDICT_STYLES.get(status.upper(), (cls.WHITE, ""))[0]

    @classmethod
    def get_verdict_symbol(cls, status: str) -> str:
        return cls.VERDICT_STYLES.get(status.upper(), (cls.WHITE, "⚪"))[1]
