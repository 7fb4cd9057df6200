"""
Offline script to precompute property embeddings.

Usage:
    python -m property_search.embeddings.precompute
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..search.data_store import save_records
from ..search.models import PropertyRecord
from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from .encoder import encode_batch


def _plural(count: float, noun: str) -> str:
    n = int(count) if float(count).is_integer() else count
    return f"{n} {noun}{'' if n == 1 else 's'}"


def _build_text(row: pd.Series) -> str:
    parts: list[str] = []
    for key in ("title", "description"):
        if pd.notna(row.get(key)) and str(row[key]).strip():
            parts.append(str(row[key]).strip().rstrip("."))
    if pd.notna(row.get("bedrooms")):
        parts.append(_plural(row["bedrooms"], "bedroom"))
    if pd.notna(row.get("bathrooms")):
        parts.append(_plural(row["bathrooms"], "bathroom"))
    if pd.notna(row.get("price")):
        parts.append(f"${float(row['price']):g} per month")
    if pd.notna(row.get("address")) and str(row["address"]).strip():
        parts.append(f"Located at {row['address']}")
    amenities = row.get("amenities")
    if isinstance(amenities, list) and amenities:
        parts.append(", ".join(str(a) for a in amenities))
    return ". ".join(parts)


def run_precompute(config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> Path:
    df = pd.read_json(config.raw_path, orient="records")
    texts = df.apply(_build_text, axis=1).tolist()

    print(f"Encoding {len(texts)} properties ...")
    embeddings = encode_batch(texts, config)

    df["embedding"] = pd.Series([list(map(float, vec)) for vec in embeddings], index=df.index)
    df["embeddingText"] = texts

    # Missing cells come back as NaN; PropertyRecord maps them to field defaults
    records = [PropertyRecord.model_validate(row) for row in df.to_dict(orient="records")]
    out_path = save_records(records, config.embeddings_path)
    print(f"Saved {len(df)} properties with {embeddings.shape[1]}-dimensional embeddings to {out_path}")
    return out_path


if __name__ == "__main__":
    run_precompute()
