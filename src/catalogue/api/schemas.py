"""Pydantic request/response schemas for the Catalogue API.

Rating request fields are untyped: the service validates them so that
every violation is reported together in one 400 response.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddRatingRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "rating": 5,
                    "review": "Great product",
                }
            ]
        }
    }

    rating: Any = None
    review: Any = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class RatingResponse(BaseModel):
    id: int
    product_id: int
    rating: int
    review: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: float
    currency: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductDetailResponse(ProductResponse):
    ratings: list[RatingResponse] = []
