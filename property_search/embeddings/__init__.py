"""
Embeddings layer for semantic search.

Responsibilities:
- Load a lightweight sentence-transformer model.
- Precompute embeddings for all properties (offline).
- Encode free-text queries at request time through an embedding provider.
"""
