"""The ProductRating aggregate, a scored review attached to one product.

Ratings are write-once: the service creates them and reads them back, it
never edits or removes them.
"""

from datetime import UTC, datetime

from protean.fields import Auto, DateTime, Integer, Text

from catalogue.domain import catalogue

MIN_SCORE = 1
MAX_SCORE = 5


def _now():
    return datetime.now(UTC)


@catalogue.aggregate
class ProductRating:
    """A customer's score and review for a product."""

    id = Auto(identifier=True, increment=True)
    product_id = Integer(required=True, min_value=1)
    rating = Integer(required=True, min_value=MIN_SCORE, max_value=MAX_SCORE)
    review = Text(required=True)

    # Generated by the store on creation
    created_at = DateTime(default=_now)
    updated_at = DateTime(default=_now)
