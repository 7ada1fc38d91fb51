"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from catalogue.domain import catalogue
from catalogue.exceptions import PersistenceError
from catalogue.product.product import Product
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


@catalogue.repository(part_of=Product)
class ProductRepository:
    """Read and create products in the catalogue store.

    Missing records raise ``ObjectNotFoundError`` untouched; every other
    failure from the underlying store surfaces as ``PersistenceError``.
    """

    def get_all(self) -> list[Product]:
        """All products, oldest first."""
        try:
            return self._dao.query.order_by("id").all().items
        except Exception as exc:
            logger.error("product_list_failed", error=str(exc))
            raise PersistenceError(f"Could not list products: {exc}") from exc

    def find_by_id(self, product_id) -> Product:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise
        except Exception as exc:
            logger.error("product_lookup_failed", product_id=product_id, error=str(exc))
            raise PersistenceError(f"Could not load product {product_id}: {exc}") from exc

    def create(self, name, price, description=None, currency="USD"):
        """Persist a new product and return its generated id."""
        product = Product(name=name, price=price, description=description, currency=currency)
        try:
            self.add(product)
        except Exception as exc:
            logger.error("product_create_failed", name=name, error=str(exc))
            raise PersistenceError(f"Could not create product {name!r}: {exc}") from exc

        return product.id
