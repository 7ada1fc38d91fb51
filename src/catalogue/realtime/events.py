"""Event names published on the realtime notification queue."""

PRODUCT_RATING_ADDED = "product-rating:added"
