from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .errors import InvalidArgumentError, LengthMismatchError
from .models import PropertyRecord, RankedResults, ScoredResult
from .vector_math import VectorLike, centroid, cosine_similarities

logger = logging.getLogger(__name__)


def rank(
    query_embedding: VectorLike,
    records: Sequence[PropertyRecord],
    top_k: int,
) -> RankedResults:
    """
    Score every record against the query and keep the ``top_k`` best.

    Records without an embedding are skipped and reported in ``warnings``.
    Equal scores keep their input order.
    """
    if top_k <= 0:
        raise InvalidArgumentError(f"top_k must be a positive integer, got {top_k}")

    query = np.asarray(query_embedding, dtype=np.float64).ravel()

    scorable: list[PropertyRecord] = []
    warnings: list[str] = []
    for record in records:
        if not record.embedding:
            msg = f"Property {record.id} missing embedding, skipping"
            logger.warning(msg)
            warnings.append(msg)
            continue
        if len(record.embedding) != query.size:
            raise LengthMismatchError(
                f"Property {record.id} has a {len(record.embedding)}-dimensional embedding, "
                f"query has {query.size}"
            )
        scorable.append(record)

    if not scorable:
        return RankedResults(results=[], warnings=warnings, total_candidates=0)

    matrix = np.asarray([r.embedding for r in scorable], dtype=np.float64)
    scores = cosine_similarities(query, matrix)

    scored = [
        ScoredResult(record=record, similarity=float(score))
        for record, score in zip(scorable, scores)
    ]
    # sorted() is stable, so ties stay in input order
    scored = sorted(scored, key=lambda s: s.similarity, reverse=True)

    return RankedResults(
        results=scored[:top_k],
        warnings=warnings,
        total_candidates=len(scorable),
    )


def rank_multi(
    query_embeddings: Sequence[VectorLike],
    records: Sequence[PropertyRecord],
    top_k: int,
) -> RankedResults:
    """Rank against the normalised centroid of several query embeddings."""
    combined = centroid(query_embeddings)
    return rank(combined, records, top_k)
