from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter

from ..embeddings.config import DEFAULT_EMBEDDING_CONFIG
from .models import PropertyRecord

logger = logging.getLogger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[PropertyRecord])

_records: list[PropertyRecord] | None = None


def load_records(path: Path) -> list[PropertyRecord]:
    """Parse a JSON array of property records (with embeddings) from ``path``."""
    records = _RECORDS_ADAPTER.validate_json(path.read_bytes())
    logger.info("Loaded %d properties from %s", len(records), path)
    return records


def save_records(records: list[PropertyRecord], path: Path) -> Path:
    """Write ``records`` as a JSON array that ``load_records`` reads back unchanged."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_RECORDS_ADAPTER.dump_json(records, indent=2, by_alias=True))
    return path


def get_records() -> list[PropertyRecord]:
    """Return the in-memory property records, loading them on first call.

    Raises ``FileNotFoundError`` until the precompute script has been run.
    """
    global _records
    if _records is None:
        _records = load_records(DEFAULT_EMBEDDING_CONFIG.embeddings_path)
    return _records


def clear_records() -> None:
    global _records
    _records = None
