from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class PropertyRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: int | str
    title: str = ""
    address: str = ""
    description: str = ""
    price: float = 0.0
    bedrooms: float = 0
    bathrooms: float = 0
    amenities: list[str] = Field(default_factory=list)
    embedding: list[float] | None = None
    embedding_text: str | None = Field(default=None, alias="embeddingText")

    @field_validator(
        "title", "address", "description", "price", "bedrooms", "bathrooms", "amenities",
        mode="before",
    )
    @classmethod
    def _missing_to_default(cls, value, info: ValidationInfo):
        # null or NaN (pandas fills absent cells with NaN) falls back to the field default
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class FilterSpec(BaseModel):
    """Attribute bounds applied before ranking. ``None`` means unconstrained."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    min_price: float | None = None
    max_price: float | None = None
    min_bedrooms: float | None = None
    max_bedrooms: float | None = None
    min_bathrooms: float | None = None
    required_amenities: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return (
            self.min_price is None
            and self.max_price is None
            and self.min_bedrooms is None
            and self.max_bedrooms is None
            and self.min_bathrooms is None
            and not self.required_amenities
        )


class SearchOptions(BaseModel):
    top_k: int = 5
    filters: FilterSpec | None = None


class ScoredResult(BaseModel):
    record: PropertyRecord
    similarity: float


class RankedResults(BaseModel):
    results: list[ScoredResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    total_candidates: int = 0


class EngineStatus(BaseModel):
    initialized: bool
    model_name: str
    device: str | None = None
    dimension: int


class SearchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1, description="Natural-language description of the property")
    top_k: int = Field(default=5, ge=1, le=50)
    filters: FilterSpec | None = None


class MultiSearchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    queries: list[str] = Field(..., min_length=1, description="Queries combined into one centroid")
    top_k: int = Field(default=5, ge=1, le=50)
    filters: FilterSpec | None = None
