from __future__ import annotations

from collections.abc import Sequence

from .models import FilterSpec, PropertyRecord


def _has_amenity(amenities: list[str], required: str) -> bool:
    """Case-insensitive substring match against any of the record's amenities."""
    needle = required.casefold()
    return any(needle in a.casefold() for a in amenities)


def matches(record: PropertyRecord, spec: FilterSpec | None) -> bool:
    """Return True when the record satisfies every bound configured in ``spec``."""
    if spec is None:
        return True

    # Price range
    if spec.min_price is not None and record.price < spec.min_price:
        return False
    if spec.max_price is not None and record.price > spec.max_price:
        return False

    # Bedrooms
    if spec.min_bedrooms is not None and record.bedrooms < spec.min_bedrooms:
        return False
    if spec.max_bedrooms is not None and record.bedrooms > spec.max_bedrooms:
        return False

    # Bathrooms
    if spec.min_bathrooms is not None and record.bathrooms < spec.min_bathrooms:
        return False

    if spec.required_amenities:
        if not record.amenities:
            return False
        if not all(_has_amenity(record.amenities, req) for req in spec.required_amenities):
            return False

    return True


def filter_properties(
    records: Sequence[PropertyRecord],
    spec: FilterSpec | None = None,
) -> list[PropertyRecord]:
    """Ordered subsequence of ``records`` matching ``spec``; the input is left untouched."""
    if spec is None or spec.is_empty():
        return list(records)

    return [r for r in records if matches(r, spec)]
