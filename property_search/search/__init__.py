"""
Property search core.

Responsibilities:
- Cosine similarity and centroid maths over embedding vectors.
- Attribute filtering (price, bedrooms, bathrooms, amenities).
- Ranking filtered properties by similarity and truncating to top K.
- The PropertySearchEngine facade tying the embedding provider to ranking.
"""
