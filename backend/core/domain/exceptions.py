"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses.

Every exception carries a stable machine-readable ``code`` that ends up in
the ``error`` key of the JSON body, next to the human ``message``.

Mapping cheatsheet
------------------
┌───────────────────────┬──────┬──────────────────────────────────────────┐
│ Domain Exception      │ Code │ Typical ``code`` values                  │
├───────────────────────┼──────┼──────────────────────────────────────────┤
│ DomainError           │ 400  │ ValidationError, EmptyRemark,            │
│                       │      │ EmptyComment, DuplicateEmail,            │
│                       │      │ DuplicateCaseId, AlreadyClosed,          │
│                       │      │ UnsupportedType, TooLarge                │
│ AuthenticationFailed  │ 401  │ InvalidCredentials, InvalidSecret        │
│ PermissionDenied      │ 403  │ Forbidden, Unauthorized, PendingApproval,│
│                       │      │ AdminAlreadyExists                       │
│ NotFound              │ 404  │ NotFound                                 │
│ Conflict              │ 409  │ Conflict                                 │
│ InvalidTransition     │ 409  │ InvalidTransition                        │
│ UpstreamError         │ 500  │ UpstreamError                            │
└───────────────────────┴──────┴──────────────────────────────────────────┘

Recommended usage inside a service::

    from core.domain.exceptions import DomainError

    if not text.strip():
        raise DomainError("Remark text is required.", code="EmptyRemark")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Caught at the view boundary and converted to a 400 Bad Request.
    """

    default_message = "A business rule was violated."
    default_code = "ValidationError"

    def __init__(self, message: str | None = None, *, code: str | None = None) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)


class AuthenticationFailed(DomainError):
    """
    The supplied credentials (password, bootstrap secret) are wrong.

    Maps to HTTP 401.
    """

    default_message = "Invalid email or password."
    default_code = "InvalidCredentials"


class PermissionDenied(DomainError):
    """
    The authenticated staff member lacks the role, approval or ownership
    required for this operation.

    Maps to HTTP 403.
    """

    default_message = "You do not have permission to perform this action."
    default_code = "Forbidden"


class NotFound(DomainError):
    """
    The requested resource does not exist.

    Maps to HTTP 404.
    """

    default_message = "The requested resource was not found."
    default_code = "NotFound"


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Maps to HTTP 409.
    """

    default_message = "The operation conflicts with the current state."
    default_code = "Conflict"


class InvalidTransition(Conflict):
    """
    A state-machine transition that is not allowed from the current status.

    Inherits from ``Conflict`` because an invalid transition IS a conflict
    with the resource's current state.  Maps to HTTP 409.

    Example::

        raise InvalidTransition(
            current="Closed",
            target="In Progress",
            reason="Closed cases cannot be reopened.",
        )
    """

    default_code = "InvalidTransition"

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
        code: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            if reason:
                parts.append(f"({reason})")
            message = " ".join(parts) + "."
        super().__init__(message, code=code)
        self.current = current
        self.target = target
        self.reason = reason


class UpstreamError(DomainError):
    """
    An external collaborator (media storage, news feed) failed.

    The message is surfaced to the client; the underlying exception is
    only logged.  Maps to HTTP 500.
    """

    default_message = "An upstream service failed."
    default_code = "UpstreamError"
