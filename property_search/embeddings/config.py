from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class EmbeddingConfig:
    model_name: str = os.getenv("PROPERTY_SEARCH_MODEL", "all-MiniLM-L6-v2")
    dimension: int = 384
    device: str | None = os.getenv("PROPERTY_SEARCH_DEVICE") or None
    batch_size: int = 32
    raw_path: Path = _DATA_DIR / "properties.json"
    embeddings_path: Path = _DATA_DIR / "properties-with-embeddings.json"


DEFAULT_EMBEDDING_CONFIG = EmbeddingConfig()
