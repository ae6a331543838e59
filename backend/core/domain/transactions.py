"""
core.domain.transactions — Helpers for safe state transitions.

Wraps ``transaction.atomic`` and ``select_for_update`` into reusable
patterns so that every app's service layer follows the same approach to
status changes.

Usage::

    from core.domain.transactions import atomic_transition

    updated_case = atomic_transition(
        instance=case,
        status_field="status",
        target_status=CaseStatus.IN_PROGRESS,
        allowed_sources={CaseStatus.OPEN},
    )
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from django.db import models, transaction

from core.domain.exceptions import InvalidTransition, NotFound

M = TypeVar("M", bound=models.Model)


def atomic_transition(
    *,
    instance: M,
    status_field: str = "status",
    target_status: str,
    allowed_sources: Iterable[str] | None = None,
    save_fields: Iterable[str] | None = None,
) -> M:
    """
    Atomically transition a model instance from one status to another.

    Steps performed inside ``transaction.atomic()``:
        1. Re-fetch the instance with ``select_for_update()`` to acquire
           a row-level lock.
        2. Read the current value of ``status_field``.
        3. If ``allowed_sources`` is provided, verify the current value
           is among them; raise ``InvalidTransition`` otherwise.
        4. Set ``status_field`` to ``target_status`` and save.
        5. Refresh and return the caller's instance.

    Raises:
        NotFound:          If the instance no longer exists in the DB.
        InvalidTransition: If the current status is not in ``allowed_sources``.
    """
    model_class = type(instance)
    allowed = set(allowed_sources) if allowed_sources is not None else None

    with transaction.atomic():
        locked = lock_for_update(model_class, instance.pk)
        current = getattr(locked, status_field)

        if allowed is not None and current not in allowed:
            raise InvalidTransition(
                current=str(current),
                target=str(target_status),
                reason="allowed from: " + ", ".join(sorted(str(s) for s in allowed)),
            )

        setattr(locked, status_field, target_status)

        update_fields = {status_field, "updated_at"}
        if save_fields:
            update_fields.update(save_fields)
        locked.save(update_fields=list(update_fields))

    instance.refresh_from_db()
    return instance


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Must be called inside an ``atomic()`` block.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{model_class._meta.verbose_name.title()} with id {pk} not found.")
