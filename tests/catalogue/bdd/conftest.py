"""Shared BDD fixtures and step definitions for product ratings."""

import pytest
from catalogue.product.product import Product
from catalogue.product.service import ProductService
from catalogue.realtime.queue import RealtimeQueue
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def service(broker):
    return ProductService(queue=RealtimeQueue(broker=broker))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product named "{name}"'), target_fixture="product_id")
def product_named(name):
    return current_domain.repository_for(Product).create(name=name, price=99.0)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("no message is published")
def no_message_published(broker):
    broker.publish.assert_not_called()


@then(parsers.cfparse('the submission is rejected for "{fields}"'))
def submission_rejected(error, fields):
    assert error["exc"] is not None
    assert set(error["exc"].messages) == {f.strip() for f in fields.split(",")}
