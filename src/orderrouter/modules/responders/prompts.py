"""System prompt for the store assistant responder."""

from __future__ import annotations

from typing import Sequence

from orderrouter.core.config import StoreConfig
from orderrouter.core.types import Category, Product

SYSTEM_PROMPT = """\
You are the virtual attendant of {store_name}, located in {city}.

PROFILE:
- Tone: friendly, upbeat, welcoming and efficient
- Speciality: freshly made snacks, fried and frozen
- Use food emojis where they fit

ABOUT THE STORE:
- Name: {store_name}
- City: {city}
- Human attendant: {contact_phone}
- Opening hours: {business_hours}
- Delivery available in {city}
- Payment: {payment_methods}

CATEGORIES:
{categories}

AVAILABLE PRODUCTS:
{products}

RULES:
1. Be warm and concise.
2. When asked about products, present the options of the matching category.
3. For special orders always ask for quantity, product, date and time; the minimum lead time is {lead_time}.
4. If you don't know the answer, point the customer to {contact_phone}.
5. Never invent prices. Use only the prices listed above.
6. Mention the {discount_method} discount when talking about payment.
7. For large orders (more than 50 units) recommend a special order.

COMMANDS THE CUSTOMER CAN USE:
- "menu": main menu
- "catalog": browse products
- "cart": view selected items
- "order": check out

Always answer in the customer's language, briefly and kindly.
"""


def _product_line(product: Product) -> str:
    line = f"- {product.name} ({product.category}): ${product.price:.2f}"
    if product.description:
        line = f"{line} | {product.description}"
    if product.size_options:
        line = f"{line} | Sizes: {', '.join(product.size_options)}"
    if not product.in_stock:
        line = f"{line} | OUT OF STOCK"
    return line


def build_system_prompt(
    store: StoreConfig,
    categories: Sequence[Category],
    products: Sequence[Product],
    *,
    discount_percent: str = "5%",
) -> str:
    methods = [f"{store.payment_methods[0]} ({discount_percent} off)", *store.payment_methods[1:]]
    return SYSTEM_PROMPT.format(
        store_name=store.name,
        city=store.city,
        contact_phone=store.contact_phone,
        business_hours=store.business_hours,
        payment_methods=", ".join(methods),
        categories="\n".join(f"- {c.name}: {c.description}" for c in categories) or "-",
        products="\n".join(_product_line(p) for p in products) or "Catalog being updated...",
        lead_time=store.order_lead_time,
        discount_method=store.payment_methods[0],
    )


__all__ = ["SYSTEM_PROMPT", "build_system_prompt"]
