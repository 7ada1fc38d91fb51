"""Repository for the ProductRating aggregate."""

from protean.exceptions import ObjectNotFoundError

from catalogue.domain import catalogue
from catalogue.exceptions import PersistenceError
from catalogue.rating.rating import ProductRating
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


@catalogue.repository(part_of=ProductRating)
class ProductRatingRepository:
    """Create and read product ratings."""

    def get_all_by_product_id(self, product_id) -> list[ProductRating]:
        """Ratings for one product in the order they were created."""
        try:
            return self._dao.query.filter(product_id=product_id).order_by("id").all().items
        except Exception as exc:
            logger.error("rating_list_failed", product_id=product_id, error=str(exc))
            raise PersistenceError(f"Could not list ratings for product {product_id}: {exc}") from exc

    def create(self, product_id, rating, review):
        """Store a new rating and return its generated id."""
        product_rating = ProductRating(product_id=product_id, rating=rating, review=review)
        try:
            self.add(product_rating)
        except Exception as exc:
            logger.error("rating_create_failed", product_id=product_id, error=str(exc))
            raise PersistenceError(f"Could not create rating for product {product_id}: {exc}") from exc

        return product_rating.id

    def find_by_id(self, rating_id) -> ProductRating:
        try:
            return self.get(rating_id)
        except ObjectNotFoundError:
            raise
        except Exception as exc:
            logger.error("rating_lookup_failed", rating_id=rating_id, error=str(exc))
            raise PersistenceError(f"Could not load rating {rating_id}: {exc}") from exc
