"""Review submission schema.

``ReviewRequest`` is the shape a rating submission must have before
anything is written. Validation collects every violation instead of
stopping at the first one, so a client sees all its mistakes at once.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as SchemaError

from catalogue.exceptions import ReviewValidationError
from catalogue.rating.rating import MAX_SCORE, MIN_SCORE

MAX_REVIEW_LENGTH = 2000

ReviewText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_REVIEW_LENGTH)]


class ReviewRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    product_id: int = Field(gt=0)
    rating: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    review: ReviewText

    @field_validator("product_id", "rating", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value


def _field_errors(exc: SchemaError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "_entity"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def validate_review_request(data) -> ReviewRequest:
    """Validate a raw submission, raising ``ReviewValidationError`` with every violation."""
    try:
        return ReviewRequest.model_validate(data)
    except SchemaError as exc:
        raise ReviewValidationError(_field_errors(exc)) from None
