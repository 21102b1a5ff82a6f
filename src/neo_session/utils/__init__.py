"""Utility helpers for neo-session."""

from .redaction import RedactingFilter, redact_text

__all__ = ["RedactingFilter", "redact_text"]
