"""FastAPI routes for products and their ratings.

Each request gets its own ``ProductService``; the request id header is the
only part of the HTTP request handed down to it.
"""

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from catalogue.api.schemas import (
    AddRatingRequest,
    ProductDetailResponse,
    ProductResponse,
    RatingResponse,
)
from catalogue.exceptions import PersistenceError
from catalogue.product.service import ProductService
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)

product_router = APIRouter(prefix="/products", tags=["products"])


def _service_for(request: Request) -> ProductService:
    return ProductService(request={"request_id": request.headers.get("x-request-id")})


@product_router.get("", response_model=list[ProductResponse])
async def list_products(request: Request) -> list[ProductResponse]:
    """List every product in the catalogue."""
    products = _service_for(request).list_all_products()
    return [ProductResponse.model_validate(product.to_dict()) for product in products]


@product_router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: int, request: Request) -> ProductDetailResponse:
    """Fetch a product with all of its ratings."""
    product = _service_for(request).get_product_with_ratings(product_id)
    return ProductDetailResponse.model_validate(product.to_dict())


@product_router.post("/{product_id}/ratings", status_code=201, response_model=RatingResponse)
async def add_rating(product_id: int, request: Request, body: AddRatingRequest | None = None) -> RatingResponse:
    """Rate a product and announce the new rating."""
    body = body or AddRatingRequest()
    rating = _service_for(request).add_rating(product_id, body.rating, body.review)
    return RatingResponse.model_validate(rating.to_dict())


async def _persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("catalogue_store_unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"error": str(exc)})


def register_catalogue_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses.

    Protean's handlers cover validation (400) and not-found (404) errors;
    store and queue failures become 503.
    """
    register_exception_handlers(app)
    app.add_exception_handler(PersistenceError, _persistence_error_handler)
