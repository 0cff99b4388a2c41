"""Resolve a user-supplied order reference to a stored Order.

Order IDs are UUIDs, which are tedious to type, so any unique prefix of
at least ``MIN_PREFIX`` characters is accepted as well.
"""

from __future__ import annotations

import uuid

from pillbox.domain.exceptions import EntityNotFoundError, ValidationError
from pillbox.domain.model.order import Order
from pillbox.domain.repository.storage import Storage

MIN_PREFIX = 4


def find_order(storage: Storage, ref: str | uuid.UUID) -> Order:
    if isinstance(ref, uuid.UUID):
        return _get(storage, ref)

    ref = (ref or "").strip().lower()
    if not ref:
        raise ValidationError("Order ID is required")

    try:
        return _get(storage, uuid.UUID(ref))
    except ValueError:
        pass

    if len(ref) < MIN_PREFIX:
        raise ValidationError(
            f"Order ID prefix '{ref}' is too short (need at least {MIN_PREFIX} characters)"
        )
    matches = [o for o in storage.list_orders() if str(o.id).startswith(ref)]
    if not matches:
        raise EntityNotFoundError(f"Order '{ref}' not found")
    if len(matches) > 1:
        raise ValidationError(
            f"Order ID prefix '{ref}' is ambiguous ({len(matches)} orders match)"
        )
    return matches[0]


def _get(storage: Storage, order_id: uuid.UUID) -> Order:
    order = storage.get_order(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order '{order_id}' not found")
    return order
