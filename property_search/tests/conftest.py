from __future__ import annotations

import pytest

from property_search.search.models import PropertyRecord


def make_record(id, embedding, **fields) -> PropertyRecord:
    return PropertyRecord(id=id, embedding=embedding, **fields)


@pytest.fixture
def sample_records() -> list[PropertyRecord]:
    return [
        make_record(1, [1.0, 0.0, 0.0], title="Sunny studio", price=3000, bedrooms=0, bathrooms=1,
                    amenities=["Natural light", "Laundry"]),
        make_record(2, [0.0, 1.0, 0.0], title="Family home", price=4200, bedrooms=3, bathrooms=2,
                    amenities=["Backyard", "Pet Friendly", "Garage parking"]),
        make_record(3, [0.9, 0.1, 0.0], title="Penthouse", price=6800, bedrooms=3, bathrooms=2.5,
                    amenities=["Concierge", "Private balcony"]),
        make_record(4, [0.0, 0.0, 1.0], title="Shared flat", price=2100, bedrooms=2, bathrooms=1,
                    amenities=[]),
    ]
