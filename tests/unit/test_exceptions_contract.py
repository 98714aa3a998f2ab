"""Contract tests for the orderrouter exception hierarchy.

Verifies that:
1. Every error derives from OrderrouterError
2. All error subclasses have stable, distinct error codes
3. Catalog lookup errors carry the product id
"""

from __future__ import annotations

import pytest

from orderrouter.core.exceptions import (
    CatalogLookupError,
    ConfigurationError,
    DeliveryError,
    DependencyError,
    InputError,
    IntegrityError,
    OrderrouterError,
    OutOfStock,
    ProductNotFound,
)

ERRORS = [
    ConfigurationError,
    InputError,
    CatalogLookupError,
    ProductNotFound,
    OutOfStock,
    DeliveryError,
    DependencyError,
    IntegrityError,
]


def test_base_error_has_code() -> None:
    code = getattr(OrderrouterError, "code", None)
    assert isinstance(code, str) and code.strip()


@pytest.mark.parametrize("error_cls", ERRORS)
def test_error_inherits_from_base(error_cls) -> None:
    assert issubclass(error_cls, OrderrouterError)


def test_codes_are_distinct() -> None:
    codes = [cls.code for cls in [OrderrouterError, *ERRORS]]
    assert len(codes) == len(set(codes))


def test_code_override_per_instance() -> None:
    err = DeliveryError("boom", code="LIST_UNSUPPORTED")

    assert err.code == "LIST_UNSUPPORTED"
    assert DeliveryError.code == "DELIVERY_ERROR"
    assert err.message == "boom"


def test_lookup_errors_carry_product_id() -> None:
    missing = ProductNotFound("croquette")
    sold_out = OutOfStock("shrimp")

    assert isinstance(missing, CatalogLookupError)
    assert missing.product_id == "croquette"
    assert str(missing) == "Product not found."
    assert sold_out.product_id == "shrimp"
    assert sold_out.code == "OUT_OF_STOCK"
