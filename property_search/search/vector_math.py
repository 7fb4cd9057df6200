from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as _sk_cosine_similarity

from .errors import EmptyInputError, LengthMismatchError

VectorLike = Sequence[float] | np.ndarray


def _as_vector(values: VectorLike) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).ravel()


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine similarity between two equal-length vectors, in [-1, 1].

    Returns exactly 0.0 when either vector has zero magnitude.
    """
    va = _as_vector(a)
    vb = _as_vector(b)
    if va.shape != vb.shape:
        raise LengthMismatchError(f"Vectors must have the same length ({va.size} != {vb.size})")

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def cosine_similarities(query: VectorLike, matrix: np.ndarray) -> np.ndarray:
    """Score one query against every row of ``matrix`` (shape (N, dim))."""
    vq = _as_vector(query)
    if matrix.ndim != 2 or matrix.shape[1] != vq.size:
        raise LengthMismatchError(
            f"Query has {vq.size} dimensions but candidates have shape {matrix.shape}"
        )
    if matrix.shape[0] == 0:
        return np.zeros(0)
    # sklearn leaves zero-norm rows at zero, so degenerate vectors score 0.0
    return _sk_cosine_similarity(vq.reshape(1, -1), matrix).ravel()


def centroid(embeddings: Sequence[VectorLike]) -> np.ndarray:
    """
    Mean of the given embeddings, re-normalised to unit length.

    A zero-magnitude mean is returned as-is.
    """
    if len(embeddings) == 0:
        raise EmptyInputError("Cannot calculate centroid of empty array")

    vectors = [_as_vector(e) for e in embeddings]
    dim = vectors[0].size
    for vec in vectors[1:]:
        if vec.size != dim:
            raise LengthMismatchError(f"All embeddings must have {dim} dimensions, got {vec.size}")

    mean = np.mean(np.vstack(vectors), axis=0)
    magnitude = np.linalg.norm(mean)
    if magnitude > 0:
        mean = mean / magnitude
    return mean
