"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage
from pillbox.infrastructure.persistence.json_storage import JsonStorage

logger = logging.getLogger(__name__)

DATA_DIR_ENVVAR = "PILLBOX_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass
class Session:
    """The ledger and storage every command in one process runs against."""

    ledger: ItemLedger
    storage: Storage


def storage(data_dir: Path | None = None) -> JsonStorage:
    return JsonStorage(Path(data_dir) if data_dir else DEFAULT_DATA_DIR)


def session(data_dir: Path | None = None) -> Session:
    """Open storage and load the ledger from it once."""
    store = storage(data_dir)
    ledger = ItemLedger.from_items(store.load_items())
    logger.debug("Loaded %d items from storage", len(ledger))
    return Session(ledger=ledger, storage=store)
