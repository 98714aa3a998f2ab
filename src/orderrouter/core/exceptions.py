"""Exception hierarchy for orderrouter.

Every class carries a stable ``code`` so log lines and tests can match on it
without depending on message text.

Usage:
    from orderrouter.core.exceptions import DeliveryError, OutOfStock
"""

from __future__ import annotations


class OrderrouterError(Exception):
    """Base exception for orderrouter."""

    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "", *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ConfigurationError(OrderrouterError):
    """Missing or invalid settings."""

    code = "CONFIGURATION_ERROR"


class InputError(OrderrouterError):
    """Malformed user input. Always recovered locally with a re-prompt."""

    code = "INPUT_ERROR"


class CatalogLookupError(OrderrouterError):
    """Catalog miss; surfaced to the customer as a plain message."""

    code = "LOOKUP_ERROR"

    def __init__(self, product_id: str, message: str = "") -> None:
        super().__init__(message or f"Catalog lookup failed for {product_id}")
        self.product_id = product_id


class ProductNotFound(CatalogLookupError):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(product_id, "Product not found.")


class OutOfStock(CatalogLookupError):
    code = "OUT_OF_STOCK"

    def __init__(self, product_id: str) -> None:
        super().__init__(product_id, "Product is out of stock.")


class DeliveryError(OrderrouterError):
    """Transport send failure. Recovered through degradation paths."""

    code = "DELIVERY_ERROR"


class DependencyError(OrderrouterError):
    """External dependency (responder model, catalog backend) failed."""

    code = "DEPENDENCY_ERROR"


class IntegrityError(OrderrouterError):
    """Unexpected failure caught at the dispatcher boundary."""

    code = "INTEGRITY_ERROR"


__all__ = [
    "OrderrouterError",
    "ConfigurationError",
    "InputError",
    "CatalogLookupError",
    "ProductNotFound",
    "OutOfStock",
    "DeliveryError",
    "DependencyError",
    "IntegrityError",
]
