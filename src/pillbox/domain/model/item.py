"""Item value object — a named stock level as seen by storage and callers."""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Item:
    """A snapshot of one ledger entry.

    Quantity zero is legal here: it is how a depleted or deleted item is
    reported to storage.
    """

    name: str
    quantity: int

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Item name is required")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValidationError(
                f"Item quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity < 0:
            raise ValidationError(
                f"Item quantity cannot be negative, got {self.quantity}"
            )

    def __str__(self) -> str:
        return f"{self.name}: {self.quantity}"
