"""Domain-level exceptions.

All recoverable rule violations are subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An argument or business rule was invalid."""


class InsufficientStockError(ValidationError):
    """A removal or dispense would drive an item's quantity below zero."""

    def __init__(self, item_name: str, requested: int, available: int) -> None:
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name} "
            f"(need {requested}, have {available}, short by {self.shortfall})"
        )

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class InvalidStateError(DomainException):
    """An order is not in the lifecycle state the operation requires."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """Persisted state could not be read or written."""


class ConsistencyError(Exception):
    """The ledger was found in a state its invariants should make impossible.

    Not a DomainException: this indicates a bug, and callers are not
    expected to recover from it.
    """
