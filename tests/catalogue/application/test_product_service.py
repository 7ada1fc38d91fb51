"""Application tests for ProductService with stand-in collaborators."""

from unittest.mock import MagicMock, call

import pytest
from catalogue.exceptions import PersistenceError, PublicationError, ReviewValidationError
from catalogue.product.service import ProductService, ProductWithRatings
from catalogue.realtime.events import PRODUCT_RATING_ADDED
from protean.exceptions import ObjectNotFoundError


@pytest.fixture
def products():
    return MagicMock(name="products")


@pytest.fixture
def ratings():
    repo = MagicMock(name="ratings")
    repo.create.return_value = 11
    repo.find_by_id.return_value = {"id": 11, "product_id": 1, "rating": 5, "review": "Great product"}
    return repo


@pytest.fixture
def queue():
    return MagicMock(name="queue")


@pytest.fixture
def service(products, ratings, queue):
    return ProductService(request={"request_id": "req-1"}, products=products, ratings=ratings, queue=queue)


class TestValidateReviewRequest:
    def test_valid_payload_returns_same_values(self, service):
        value = service.validate_review_request({"product_id": 1, "rating": 5, "review": "Great product"})
        assert (value.product_id, value.rating, value.review) == (1, 5, "Great product")

    def test_lists_every_violated_field(self, service):
        with pytest.raises(ReviewValidationError) as exc:
            service.validate_review_request({"rating": 10})
        assert set(exc.value.messages) == {"product_id", "rating", "review"}
        assert exc.value.bad_request is True


class TestListAllProducts:
    def test_returns_repository_result_unchanged(self, service, products):
        listing = [object(), object(), object()]
        products.get_all.return_value = listing

        assert service.list_all_products() is listing
        products.get_all.assert_called_once_with()

    def test_persistence_failure_propagates(self, service, products):
        products.get_all.side_effect = PersistenceError("store down")

        with pytest.raises(PersistenceError):
            service.list_all_products()


class TestGetProductWithRatings:
    def test_attaches_ratings_in_order(self, service, products, ratings):
        product = MagicMock(name="product")
        product.name = "Burr Grinder"
        found = ["r1", "r2", "r3"]
        products.find_by_id.return_value = product
        ratings.get_all_by_product_id.return_value = found

        result = service.get_product_with_ratings(7)

        assert isinstance(result, ProductWithRatings)
        assert result.product is product
        assert result.ratings == found
        assert result.name == "Burr Grinder"
        products.find_by_id.assert_called_once_with(7)
        ratings.get_all_by_product_id.assert_called_once_with(7)

    def test_missing_product_skips_ratings_lookup(self, service, products, ratings):
        products.find_by_id.side_effect = ObjectNotFoundError({"_entity": ["Product 42 not found"]})

        with pytest.raises(ObjectNotFoundError):
            service.get_product_with_ratings(42)
        ratings.get_all_by_product_id.assert_not_called()

    def test_ratings_failure_propagates(self, service, products, ratings):
        products.find_by_id.return_value = MagicMock()
        ratings.get_all_by_product_id.side_effect = PersistenceError("store down")

        with pytest.raises(PersistenceError):
            service.get_product_with_ratings(7)


class TestAddRating:
    def test_success_sequence(self, service, ratings, queue):
        hydrated = ratings.find_by_id.return_value

        result = service.add_rating(1, 5, "Great product")

        assert result == hydrated
        ratings.create.assert_called_once_with(1, 5, "Great product")
        ratings.find_by_id.assert_called_once_with(11)
        queue.create.assert_called_once_with(PRODUCT_RATING_ADDED, {"rating": hydrated, "product_id": 1})
        queue.create.return_value.save.assert_called_once_with()

    def test_event_name(self):
        assert PRODUCT_RATING_ADDED == "product-rating:added"

    def test_steps_run_in_order(self, products, ratings, queue):
        manager = MagicMock()
        manager.attach_mock(ratings, "ratings")
        manager.attach_mock(queue, "queue")
        service = ProductService(products=products, ratings=ratings, queue=queue)

        service.add_rating(1, 5, "Great product")

        called = [c[0] for c in manager.mock_calls]
        assert called[:3] == ["ratings.create", "ratings.find_by_id", "queue.create"]
        assert manager.mock_calls[3] == call.queue.create().save()

    def test_validation_failure_has_no_side_effects(self, service, ratings, queue):
        with pytest.raises(ReviewValidationError) as exc:
            service.add_rating(1, 0, "")

        assert set(exc.value.messages) == {"rating", "review"}
        ratings.create.assert_not_called()
        ratings.find_by_id.assert_not_called()
        queue.create.assert_not_called()

    def test_create_failure_skips_publication(self, service, ratings, queue):
        ratings.create.side_effect = PersistenceError("insert failed")

        with pytest.raises(PersistenceError):
            service.add_rating(1, 5, "Great product")
        ratings.find_by_id.assert_not_called()
        queue.create.assert_not_called()

    def test_hydration_failure_skips_publication(self, service, ratings, queue):
        ratings.find_by_id.side_effect = PersistenceError("read failed")

        with pytest.raises(PersistenceError):
            service.add_rating(1, 5, "Great product")
        queue.create.assert_not_called()

    def test_publication_failure_propagates_after_create(self, service, ratings, queue):
        queue.create.return_value.save.side_effect = PublicationError("broker down")

        with pytest.raises(PersistenceError):
            service.add_rating(1, 5, "Great product")
        ratings.create.assert_called_once()

    def test_review_text_is_normalized_before_storage(self, service, ratings):
        service.add_rating("1", 4, "  Solid build  ")
        ratings.create.assert_called_once_with(1, 4, "Solid build")

    def test_event_carries_product_id_as_given(self, service, ratings, queue):
        service.add_rating("1", 4, "Solid build")

        payload = queue.create.call_args.args[1]
        assert payload["product_id"] == "1"
        assert payload["rating"] == ratings.find_by_id.return_value


class TestPublishToRealtimeQueue:
    def test_creates_and_saves_message(self, service, queue):
        queue.create.return_value.save.return_value = "msg-9"

        assert service.publish_to_realtime_queue("custom:event", {"a": 1}) == "msg-9"
        queue.create.assert_called_once_with("custom:event", {"a": 1})
