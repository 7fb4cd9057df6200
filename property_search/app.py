from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import FastAPI, HTTPException

from .search.data_store import get_records
from .search.engine import get_engine
from .search.errors import (
    NotInitializedError,
    ProviderError,
    SearchError,
    SearchTimeoutError,
)
from .search.models import (
    MultiSearchRequest,
    PropertyRecord,
    RankedResults,
    SearchOptions,
    SearchRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Property Semantic Search API", version="1.0.0")


def _load_records() -> list[PropertyRecord]:
    try:
        return get_records()
    except FileNotFoundError:
        raise HTTPException(
            status_code=503,
            detail="Property embeddings not found; run the precompute script first",
        )


def _run_search(fn: Callable[[], RankedResults]) -> RankedResults:
    try:
        return fn()
    except NotInitializedError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except SearchTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc))
    except ProviderError as exc:
        logger.warning("Embedding provider failed", exc_info=True)
        raise HTTPException(status_code=502, detail=str(exc))
    except SearchError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _engine():
    try:
        return get_engine()
    except ProviderError as exc:
        logger.warning("Search engine unavailable", exc_info=True)
        raise HTTPException(status_code=503, detail=str(exc))


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/status")
def status() -> dict:
    engine = _engine()
    try:
        record_count = len(get_records())
    except FileNotFoundError:
        record_count = 0
    return {**engine.status().model_dump(), "record_count": record_count}


# ── Search endpoints ─────────────────────────────────────────────────────


@app.post("/search", response_model=RankedResults)
def search(body: SearchRequest) -> RankedResults:
    engine = _engine()
    records = _load_records()
    options = SearchOptions(top_k=body.top_k, filters=body.filters)
    return _run_search(lambda: engine.search(body.query, records, options))


@app.post("/multi-search", response_model=RankedResults)
def multi_search(body: MultiSearchRequest) -> RankedResults:
    engine = _engine()
    records = _load_records()
    options = SearchOptions(top_k=body.top_k, filters=body.filters)
    return _run_search(lambda: engine.multi_search(body.queries, records, options))
