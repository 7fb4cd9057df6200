from __future__ import annotations


class SearchError(Exception):
    """Base class for every error raised by the search core."""


class InvalidArgumentError(SearchError, ValueError):
    """Empty query, empty record set, or a non-positive ``top_k``."""


class LengthMismatchError(SearchError, ValueError):
    """Two embeddings of different dimensionality were combined."""


class EmptyInputError(SearchError, ValueError):
    """A centroid was requested over zero embeddings."""


class NotInitializedError(SearchError, RuntimeError):
    """A search was attempted before ``initialize()`` acquired a provider."""


class ProviderError(SearchError):
    """The embedding provider failed to load or to encode a text."""


class SearchTimeoutError(SearchError, TimeoutError):
    """The embedding provider did not answer before the configured deadline."""
