"""Per-request orchestration over products and ratings.

Every operation is a straight sequence of calls against the catalogue
repositories and the realtime queue. The first failure aborts the
sequence and reaches the caller unchanged; nothing is retried or undone.
"""

from protean.utils.globals import current_domain

from catalogue.exceptions import ReviewValidationError
from catalogue.product.product import Product
from catalogue.rating.rating import ProductRating
from catalogue.rating.schema import ReviewRequest, validate_review_request
from catalogue.realtime.events import PRODUCT_RATING_ADDED
from catalogue.realtime.queue import RealtimeQueue
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


class ProductWithRatings:
    """A product together with the ratings fetched for it.

    Attribute access falls through to the wrapped product, so callers can
    treat it as the product with an extra ``ratings`` list.
    """

    def __init__(self, product, ratings):
        self.product = product
        self.ratings = list(ratings)

    def __getattr__(self, name):
        if name == "product":
            raise AttributeError(name)
        return getattr(self.product, name)

    def to_dict(self):
        data = self.product.to_dict()
        data["ratings"] = [rating.to_dict() for rating in self.ratings]
        return data

    def __repr__(self):
        return f"<ProductWithRatings {self.product!r} ratings={len(self.ratings)}>"


class ProductService:
    """Product and rating operations bound to one caller context.

    Collaborators are taken from the active domain unless given explicitly.
    """

    def __init__(self, request=None, products=None, ratings=None, queue=None):
        self.request = request
        self.products = products if products is not None else current_domain.repository_for(Product)
        self.ratings = ratings if ratings is not None else current_domain.repository_for(ProductRating)
        self.queue = queue if queue is not None else RealtimeQueue(request=request)

    def validate_review_request(self, data) -> ReviewRequest:
        try:
            return validate_review_request(data)
        except ReviewValidationError as exc:
            logger.info("review_request_rejected", errors=exc.messages)
            raise

    def list_all_products(self):
        return self.products.get_all()

    def get_product_with_ratings(self, product_id) -> ProductWithRatings:
        """Fetch a product and attach its ratings.

        The ratings lookup only runs once the product is known to exist.
        """
        product = self.products.find_by_id(product_id)
        ratings = self.ratings.get_all_by_product_id(product_id)

        return ProductWithRatings(product, ratings)

    def publish_to_realtime_queue(self, event, payload):
        return self.queue.create(event, payload).save()

    def add_rating(self, product_id, rating, review):
        """Validate, store, re-read and announce a new rating.

        The rating is read back after creation so the caller and the queue
        both get the stored record with its generated fields. If publishing
        fails the rating stays stored and the error is raised.
        """
        submission = self.validate_review_request(
            {
                "product_id": product_id,
                "rating": rating,
                "review": review,
            }
        )

        rating_id = self.ratings.create(submission.product_id, submission.rating, submission.review)
        created_rating = self.ratings.find_by_id(rating_id)
        logger.info("product_rating_created", product_id=submission.product_id, rating_id=rating_id)

        self.publish_to_realtime_queue(
            PRODUCT_RATING_ADDED,
            {
                "rating": created_rating,
                "product_id": product_id,
            },
        )

        return created_rating
