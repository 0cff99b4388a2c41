"""Command base class shared by every use case.

A command is built with already-parsed arguments and run with
``execute(ledger, storage)``.  It either succeeds in full — mutating the
ledger and/or an order and issuing exactly one persistence call — or
fails leaving the ledger as it found it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from pillbox.domain.exceptions import StorageError
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage

logger = logging.getLogger(__name__)


class Command(ABC):

    @abstractmethod
    def execute(self, ledger: ItemLedger, storage: Storage) -> object:
        """Run the command and return a DTO for display (or None)."""

    def is_exit(self) -> bool:
        """True only for the command that ends an interactive session."""
        return False


@contextmanager
def rollback_on_failure(ledger: ItemLedger) -> Iterator[None]:
    """Undo any ledger mutation made inside the block if the block raises.

    Wraps the mutate-then-persist step so that a failed storage write
    does not leave the in-memory ledger ahead of what was saved.
    """
    snapshot = ledger.snapshot()
    try:
        yield
    except Exception as exc:
        if isinstance(exc, StorageError):
            logger.warning("Save failed, restoring ledger to its previous state: %s", exc)
        ledger.restore(snapshot)
        raise
