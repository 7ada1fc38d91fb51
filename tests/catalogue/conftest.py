import os
from unittest.mock import MagicMock

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session", autouse=True)
def setup_db(_catalogue_domain):
    from catalogue.utils.db import drop_db, setup_db

    setup_db(_catalogue_domain)

    yield

    drop_db(_catalogue_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture
def broker():
    """A stand-in broker that records publishes."""
    fake = MagicMock()
    fake.publish.return_value = "msg-001"
    return fake


@pytest.fixture
def create_product():
    from catalogue.product.product import Product
    from protean.utils.globals import current_domain

    def _create(**overrides):
        defaults = {"name": "Espresso Machine", "price": 249.0, "description": "15-bar pump"}
        defaults.update(overrides)
        return current_domain.repository_for(Product).create(**defaults)

    return _create
