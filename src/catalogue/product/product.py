"""The Product aggregate, the catalogue item customers rate.

Descriptive attributes belong to the catalogue store; the ratings service
only reads them and hands them back to callers unchanged.
"""

from datetime import UTC, datetime

from protean.fields import Auto, DateTime, Float, String, Text

from catalogue.domain import catalogue


def _now():
    return datetime.now(UTC)


@catalogue.aggregate
class Product:
    """A product listed in the catalogue."""

    id = Auto(identifier=True, increment=True)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")

    created_at = DateTime(default=_now)
    updated_at = DateTime(default=_now)
