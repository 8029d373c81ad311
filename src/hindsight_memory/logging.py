"""Centralized logging configuration for hindsight-memory.

Entry points (the CLI, or a host embedding the plugin) should call
configure_logging() early. Library code only ever uses
logging.getLogger(__name__).

Logging Levels:
- DEBUG: Individual remote requests
- INFO: Registration, lifecycle, auto-retain/auto-recall summaries
- WARNING: Hook and tool failures (memory degraded, conversation continues)
- ERROR: Failures of CLI commands
"""

import logging
import os
import re
from dataclasses import dataclass, field

# Default patterns for secret detection and redaction
DEFAULT_REDACT_PATTERNS: list[str] = [
    # API key prefixes
    r"\b(sk-[A-Za-z0-9_-]{20,})\b",
    r"\b(hs_[A-Za-z0-9_-]{16,})\b",
    # ENV-style assignments: API_KEY=secret or API_KEY: secret
    r"\b[A-Z0-9_]+(?:KEY|TOKEN|SECRET|PASSWORD)\s*[=:]\s*([^\s\"']{8,})",
    # Bearer tokens in headers
    r"\bBearer\s+([A-Za-z0-9._\-+=]{8,})\b",
]


@dataclass
class SecretRedactor:
    """Redacts sensitive information from log messages.

    Long tokens keep their first and last four characters so that a
    redacted key can still be told apart from another one.
    """

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        """Redact secrets from text, preserving partial info for debugging."""
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        full = match.group(0)
        token = match.group(1) if match.lastindex else full

        # Already redacted
        if "..." in token:
            return full

        if len(token) < 12:
            return full.replace(token, "***") if token != full else "***"

        masked = f"{token[:4]}...{token[-4:]}"
        return full.replace(token, masked) if token != full else masked


_redactor = SecretRedactor()


def get_redactor() -> SecretRedactor:
    return _redactor


class RedactingFormatter(logging.Formatter):
    """Formatter that masks secrets and exposes a short component name.

    Converts module paths to component names:
    - hindsight_memory.client -> client
    - hindsight_memory.tools.memory -> tools
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "hindsight_memory":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return _redactor.redact(super().format(record))


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",
    "httpcore",
]


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure logging for hindsight-memory.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses HINDSIGHT_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful console output.
    """
    if level is None:
        level = os.environ.get("HINDSIGHT_LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = "INFO"

    log_level = getattr(logging, level)

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(RedactingFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            RedactingFormatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True,
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
