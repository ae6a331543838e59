"""
core.domain.validators — Small input checks shared by service layers.

Serializers reject *absent* fields; these helpers reject values that are
present but meaningless, with the domain-specific error code::

    text = require_text(data.get("text"), code="EmptyRemark",
                        message="Remark text is required.")
"""

from __future__ import annotations

from core.domain.exceptions import DomainError


def require_text(value: str | None, *, code: str, message: str) -> str:
    """
    Return ``value`` with surrounding whitespace removed.

    Raises:
        DomainError: with ``code`` when ``value`` is ``None`` or blank.
    """
    if value is None or not value.strip():
        raise DomainError(message, code=code)
    return value.strip()
