"""Log sanitization filter to keep credentials and PII out of logs.

Redacts, before a record is emitted:
- JWTs and bearer tokens
- Password, secret and token fields
- Bcrypt hashes
- Email addresses

Usage:
    from kalistheniks.utils.log_sanitizer import configure_logging

    configure_logging("INFO")
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts sensitive information from log messages."""

    # Order matters: JWTs before bearer tokens, specific fields before generic ones
    PATTERNS: list[tuple[re.Pattern, str]] = [
        (re.compile(r'\beyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]*'), '[REDACTED_JWT]'),
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.\[\]]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),
        (re.compile(r'\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}'), '[REDACTED_HASH]'),
        (re.compile(r'(password(?:_hash)?["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(secret(?:_key)?["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[REDACTED_EMAIL]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; never drops it."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))
        if record.args:
            record.args = self._sanitize_args(record.args)
        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        """Recursively sanitize log arguments."""
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        elif isinstance(args, (int, float, bool)) or args is None:
            return args
        else:
            return self._sanitize(str(args))


def install_log_sanitizer() -> None:
    """Attach the sanitization filter to every root handler."""
    sanitizer = LogSanitizationFilter()
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, LogSanitizationFilter) for f in handler.filters):
            handler.addFilter(sanitizer)


def configure_logging(level: str = "INFO") -> None:
    """Set up basic logging and install the sanitizer."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    install_log_sanitizer()
