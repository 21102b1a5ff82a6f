"""Helpers for keeping credentials out of logs.

Session code handles passwords, password hashes and signed tokens. Services
never pass those to a logger on purpose; this module is the safety net that
masks anything token- or hash-shaped that still reaches a log record.
"""

import logging
import re
from typing import Any

# header.payload.signature, each part base64url; JWT headers always start "eyJ"
_JWT_PATTERN = re.compile(r"eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+")
_SCRYPT_HASH_PATTERN = re.compile(r"\$scrypt\$[^\s$]+\$[A-Za-z0-9+/=]+\$[A-Za-z0-9+/=]+")

TOKEN_PLACEHOLDER = "<redacted-token>"
HASH_PLACEHOLDER = "<redacted-hash>"


def redact_text(text: str) -> str:
    """Return *text* with signed tokens and password hashes masked."""
    text = _SCRYPT_HASH_PATTERN.sub(HASH_PLACEHOLDER, text)
    return _JWT_PATTERN.sub(TOKEN_PLACEHOLDER, text)


def _redact_arg(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    return value


class RedactingFilter(logging.Filter):
    """Logging filter that masks tokens and hashes in messages and arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_text(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_redact_arg(arg) for arg in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: _redact_arg(arg) for key, arg in record.args.items()}
        return True
