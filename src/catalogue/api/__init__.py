"""Catalogue domain API package."""

from catalogue.api.routes import product_router, register_catalogue_exception_handlers

__all__ = ["product_router", "register_catalogue_exception_handlers"]
