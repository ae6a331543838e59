"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF exception handler producing the ``{message, error}`` body.
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.
access             Service-layer admin / ownership guards.
validators         Blank-text checks with domain error codes.

Usage from any app::

    from core.domain.exceptions import DomainError, InvalidTransition
    from core.domain.transactions import atomic_transition
    from core.domain.access import require_admin
"""
