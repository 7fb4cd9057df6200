from __future__ import annotations

import logging
from typing import Protocol

import numpy as np
from sentence_transformers import SentenceTransformer

from ..search.errors import ProviderError
from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig

logger = logging.getLogger(__name__)

_models: dict[tuple[str, str | None], SentenceTransformer] = {}


class EmbeddingProvider(Protocol):
    """Anything that turns a text into a fixed-length vector."""

    def embed(self, text: str) -> np.ndarray: ...


def _get_model(config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> SentenceTransformer:
    key = (config.model_name, config.device)
    model = _models.get(key)
    if model is None:
        logger.info("Loading embedding model %s (device=%s)", config.model_name, config.device or "auto")
        model = SentenceTransformer(config.model_name, device=config.device)
        _models[key] = model
    return model


def encode_text(text: str, config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> np.ndarray:
    """Encode a single string into a 1-D, L2-normalised embedding vector."""
    model = _get_model(config)
    return model.encode(text, show_progress_bar=False, normalize_embeddings=True)


def encode_batch(texts: list[str], config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> np.ndarray:
    """Encode a list of strings into a 2-D array of shape (N, dim)."""
    model = _get_model(config)
    return model.encode(
        texts,
        show_progress_bar=True,
        batch_size=config.batch_size,
        normalize_embeddings=True,
    )


class SentenceTransformerProvider:
    """Embedding provider backed by a locally loaded sentence-transformer.

    The model is loaded eagerly so that a missing model or a broken runtime
    surfaces at construction time instead of on the first search.
    """

    def __init__(self, config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> None:
        self.config = config
        try:
            self._model = _get_model(config)
        except Exception as exc:
            raise ProviderError(f"Failed to load embedding model {config.model_name}: {exc}") from exc

    @property
    def device(self) -> str:
        return str(self._model.device)

    def embed(self, text: str) -> np.ndarray:
        try:
            vec = encode_text(text, self.config)
        except Exception as exc:
            raise ProviderError(f"Failed to generate embedding: {exc}") from exc
        return np.asarray(vec, dtype=np.float64)

    def embed_batch(self, texts: list[str]) -> np.ndarray:
        try:
            vecs = encode_batch(texts, self.config)
        except Exception as exc:
            raise ProviderError(f"Failed to generate embeddings: {exc}") from exc
        return np.asarray(vecs, dtype=np.float64)
