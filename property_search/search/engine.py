"""
PropertySearchEngine: natural-language search over property records.

The engine owns the embedding provider and runs the pipeline
embed query -> filter records -> rank by cosine similarity -> top K.
It must be initialised once before any search; initialisation loads the
embedding model (or whatever the injected factory returns).
"""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import numpy as np

from ..embeddings.encoder import EmbeddingProvider, SentenceTransformerProvider
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .errors import (
    InvalidArgumentError,
    NotInitializedError,
    ProviderError,
    SearchTimeoutError,
)
from .filters import filter_properties
from .models import EngineStatus, PropertyRecord, RankedResults, SearchOptions
from .ranking import rank, rank_multi

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], EmbeddingProvider]


class PropertySearchEngine:
    def __init__(
        self,
        provider_factory: ProviderFactory | None = None,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> None:
        self.config = config
        self._provider_factory = provider_factory or (
            lambda: SentenceTransformerProvider(config.embedding)
        )
        self._provider: EmbeddingProvider | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._provider is not None

    def initialize(self) -> None:
        """Acquire the embedding provider. Calling it again is a no-op."""
        with self._lock:
            self._initialize_locked()

    def _initialize_locked(self) -> None:
        if self._provider is not None:
            logger.debug("PropertySearchEngine already initialized")
            return

        start = time.time()
        try:
            provider = self._provider_factory()
        except ProviderError:
            logger.error("Failed to initialize PropertySearchEngine", exc_info=True)
            raise
        except Exception as exc:
            logger.error("Failed to initialize PropertySearchEngine", exc_info=True)
            raise ProviderError(f"Failed to load embedding model: {exc}") from exc

        self._provider = provider
        elapsed_ms = round((time.time() - start) * 1000, 1)
        logger.info("PropertySearchEngine initialized in %sms", elapsed_ms)

    def status(self) -> EngineStatus:
        device = getattr(self._provider, "device", None) if self._provider else None
        return EngineStatus(
            initialized=self.is_initialized,
            model_name=self.config.embedding.model_name,
            device=str(device) if device is not None else None,
            dimension=self.config.embedding.dimension,
        )

    # ── Embedding ────────────────────────────────────────────────────────

    def _require_provider(self) -> EmbeddingProvider:
        if self._provider is None:
            raise NotInitializedError("SearchEngine not initialized. Call initialize() first.")
        return self._provider

    def _call_provider(self, provider: EmbeddingProvider, text: str) -> np.ndarray:
        try:
            vec = provider.embed(text)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(f"Failed to generate embedding: {exc}") from exc
        return np.asarray(vec, dtype=np.float64).ravel()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="embed")
            return self._executor

    def _await_all(self, futures: list[Future], timeout: float) -> list[np.ndarray]:
        deadline = time.monotonic() + timeout
        vectors: list[np.ndarray] = []
        try:
            for future in futures:
                remaining = max(0.0, deadline - time.monotonic())
                vectors.append(future.result(timeout=remaining))
        except FutureTimeoutError as exc:
            raise SearchTimeoutError(
                f"Embedding provider did not respond within {timeout}s"
            ) from exc
        finally:
            for future in futures:
                future.cancel()
        return vectors

    def _embed_all(self, texts: Sequence[str]) -> list[np.ndarray]:
        provider = self._require_provider()
        timeout = self.config.timeout
        if timeout is None:
            return [self._call_provider(provider, t) for t in texts]

        executor = self._get_executor()
        futures = [executor.submit(self._call_provider, provider, t) for t in texts]
        return self._await_all(futures, timeout)

    def generate_embedding(self, text: str) -> np.ndarray:
        """Embed a single text with the configured provider."""
        return self._embed_all([text])[0]

    # ── Search ───────────────────────────────────────────────────────────

    def _validate(self, records: Sequence[PropertyRecord], options: SearchOptions) -> None:
        if not records:
            raise InvalidArgumentError("Properties must be a non-empty array")
        if options.top_k <= 0:
            raise InvalidArgumentError(f"top_k must be a positive integer, got {options.top_k}")

    def _options(self, options: SearchOptions | None) -> SearchOptions:
        return options or SearchOptions(top_k=self.config.default_top_k)

    def search(
        self,
        query: str,
        records: Sequence[PropertyRecord],
        options: SearchOptions | None = None,
    ) -> RankedResults:
        """Return the ``top_k`` records most similar to ``query`` that pass the filters."""
        self._require_provider()
        if not isinstance(query, str) or not query.strip():
            raise InvalidArgumentError("Query must be a non-empty string")
        opts = self._options(options)
        self._validate(records, opts)

        start = time.time()
        query_embedding = self.generate_embedding(query)

        candidates = filter_properties(records, opts.filters)
        if len(candidates) != len(records):
            logger.info("Filtered %d properties to %d", len(records), len(candidates))

        ranked = rank(query_embedding, candidates, opts.top_k)

        elapsed_ms = round((time.time() - start) * 1000, 1)
        logger.info(
            'Search "%s" returned %d results from %d candidates in %sms',
            query, len(ranked.results), ranked.total_candidates, elapsed_ms,
        )
        return ranked

    def multi_search(
        self,
        queries: Sequence[str],
        records: Sequence[PropertyRecord],
        options: SearchOptions | None = None,
    ) -> RankedResults:
        """Search with the centroid of several queries' embeddings."""
        self._require_provider()
        if isinstance(queries, str) or not queries:
            raise InvalidArgumentError("Queries must be a non-empty list of strings")
        for q in queries:
            if not isinstance(q, str) or not q.strip():
                raise InvalidArgumentError("Every query must be a non-empty string")
        opts = self._options(options)
        self._validate(records, opts)

        start = time.time()
        query_embeddings = self._embed_all(queries)

        candidates = filter_properties(records, opts.filters)
        ranked = rank_multi(query_embeddings, candidates, opts.top_k)

        elapsed_ms = round((time.time() - start) * 1000, 1)
        logger.info(
            "Multi-search over %d queries returned %d results in %sms",
            len(queries), len(ranked.results), elapsed_ms,
        )
        return ranked

    def close(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)


_engine: PropertySearchEngine | None = None
_engine_lock = threading.Lock()


def get_engine() -> PropertySearchEngine:
    """Return the process-wide engine, initialising it on first call."""
    global _engine
    with _engine_lock:
        if _engine is None:
            engine = PropertySearchEngine()
            engine.initialize()
            _engine = engine
        return _engine
