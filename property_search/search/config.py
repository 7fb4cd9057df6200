from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..embeddings.config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig


def _env_timeout() -> float | None:
    raw = os.getenv("PROPERTY_SEARCH_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class SearchConfig:
    default_top_k: int = 5
    # Seconds to wait for the embedding provider; None waits forever.
    timeout: float | None = field(default_factory=_env_timeout)
    embedding: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG


DEFAULT_SEARCH_CONFIG = SearchConfig()
