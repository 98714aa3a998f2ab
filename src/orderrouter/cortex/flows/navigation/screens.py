"""Customer-facing screens.

Everything here is a pure function of store configuration, catalog data and
cart contents. Nothing sends; callers wrap the results in outbound actions.
"""

from __future__ import annotations

from typing import Sequence

from orderrouter.core.config import StoreConfig
from orderrouter.core.types import Category, Product
from orderrouter.cortex.presentation.actions import OutboundImage
from orderrouter.cortex.presentation.choices import (
    ChoiceList,
    ChoiceRow,
    ChoiceSection,
    single_section,
)
from orderrouter.cortex.services.cart import (
    DEFAULT_VARIANT,
    DISCOUNT_RATE,
    CartTotals,
    LineItem,
    format_line_items,
    format_money,
)

RULE = "────────────────────"

# Selection ids
MENU_CATALOG = "menu:catalog"
MENU_PROMO = "menu:promo"
MENU_CART = "menu:cart"
MENU_CHECKOUT = "menu:checkout"
MENU_SPECIAL_ORDERS = "menu:order"
MENU_ATTENDANT = "menu:attendant"
MENU_ABOUT = "menu:about"

ACTION_ADD = "action:add"
ACTION_OTHER = "action:other"
ACTION_CATEGORIES = "action:categories"

AFTER_CONTINUE = "after:continue"
AFTER_CART = "after:cart"
AFTER_CHECKOUT = "after:checkout"


def category_selection_id(category: Category) -> str:
    return f"cat:{category.id}"


def product_selection_id(product: Product) -> str:
    return f"prod:{product.id}"


def _discount_percent() -> str:
    return f"{DISCOUNT_RATE * 100:.0f}%"


def heading(title: str) -> str:
    return f"*{title.upper()}*\n{RULE}"


def main_menu(store: StoreConfig) -> ChoiceList:
    return ChoiceList(
        prompt=(
            f"{heading(store.name)}\n\nHello! Welcome. ✨\n{store.tagline}\n\n"
            "What would you like today?"
        ),
        sections=(
            ChoiceSection(
                title="Catalog",
                rows=(
                    ChoiceRow("Browse catalog", MENU_CATALOG, "See everything we make"),
                    ChoiceRow("Promotions", MENU_PROMO, "Today's offers"),
                    ChoiceRow("My cart", MENU_CART, "Review selected items"),
                ),
            ),
            ChoiceSection(
                title="Orders",
                rows=(
                    ChoiceRow("Place order", MENU_CHECKOUT, "Finish my purchase"),
                    ChoiceRow("Special orders", MENU_SPECIAL_ORDERS, "Parties and events"),
                ),
            ),
            ChoiceSection(
                title="Service",
                rows=(
                    ChoiceRow("Talk to an attendant", MENU_ATTENDANT, "Chat with a person"),
                    ChoiceRow("About us", MENU_ABOUT, f"Get to know {store.name}"),
                ),
            ),
        ),
        footer=f"{store.city} | {store.contact_phone}",
        button_text="Open menu",
    )


def category_menu(store: StoreConfig, categories: Sequence[Category]) -> ChoiceList:
    rows = [
        ChoiceRow(
            label=f"{c.emoji} {c.name}".strip(),
            selection_id=category_selection_id(c),
            description=c.description,
        )
        for c in categories
    ]
    return single_section(
        "Categories",
        rows,
        prompt=f"{heading('Our catalog')}\n\nPick a category.\nDelivery in {store.city}.",
        footer="Or type *menu* to go back",
        button_text="See catalog",
    )


def product_menu(category: Category, products: Sequence[Product]) -> ChoiceList:
    rows = []
    for p in products:
        description = format_money(p.price)
        if p.size_options:
            description = f"{description} | {', '.join(p.size_options)}"
        rows.append(
            ChoiceRow(label=p.name, selection_id=product_selection_id(p), description=description)
        )
    return single_section(
        category.name,
        rows,
        prompt=f"{heading(category.name)}\n\nPick a product.",
        footer="Or type *back* for categories",
        button_text="See products",
    )


def empty_category_text(category: Category) -> str:
    return f"No products available in {category.name} right now.\n\nType *menu* to go back."


def image_url(path: str, base_url: str) -> str:
    if path.startswith(("http://", "https://")) or not base_url:
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def product_images(product: Product, base_url: str = "") -> list[OutboundImage]:
    caption = f"📷 {product.name} | {format_money(product.price)}"
    return [
        OutboundImage(url=image_url(path, base_url), caption=caption) for path in product.images
    ]


def product_detail_text(product: Product, category: Category) -> str:
    lines = [
        heading("Product details"),
        "",
        f"*{product.name}*",
        "",
        f"💰 Price: {format_money(product.price)}",
    ]
    if product.size_options:
        lines.append(f"📦 Sizes: {', '.join(product.size_options)}")
    if product.variant_options:
        lines.append(f"🎨 Options: {', '.join(product.variant_options)}")
    lines.append(f"📂 Category: {category.name}")
    if product.description:
        lines.extend(["", product.description])
    lines.extend(["", "What would you like to do?"])
    return "\n".join(lines)


def action_menu(category: Category) -> ChoiceList:
    rows = [
        ChoiceRow("Add to cart", ACTION_ADD, "Choose size and options"),
        ChoiceRow("See other products", ACTION_OTHER, f"Back to {category.name}"),
        ChoiceRow("Back to categories", ACTION_CATEGORIES, "See all categories"),
    ]
    return single_section("Actions", rows, prompt="", button_text="Choose")


def size_menu(product: Product) -> ChoiceList:
    rows = [
        ChoiceRow(label=size, selection_id=f"size:{i}", description=f"Select {size}")
        for i, size in enumerate(product.size_options or ())
    ]
    return single_section(
        "Sizes",
        rows,
        prompt=(
            f"{heading('Size')}\n\n*{product.name}*\n"
            f"💰 {format_money(product.price)} each\n\nWhich size?"
        ),
        footer="Or type *cancel* to go back",
        button_text="Choose size",
    )


def variant_menu(product: Product, size: str) -> ChoiceList:
    rows = [
        ChoiceRow(label=variant, selection_id=f"variant:{i}", description=f"Select {variant}")
        for i, variant in enumerate(product.variant_options or ())
    ]
    return single_section(
        "Options",
        rows,
        prompt=f"{heading('Choose an option')}\n\n*{product.name}*\n📦 Size: {size}",
        footer="Or type *cancel* to go back",
        button_text="Choose option",
    )


def added_text(
    line: LineItem,
    lines: Sequence[LineItem],
    standard: CartTotals,
    discounted: CartTotals,
    store: StoreConfig,
) -> str:
    detail = [f"📦 {line.size}"]
    if line.variant != DEFAULT_VARIANT:
        detail.append(f"🎨 {line.variant}")
    detail.append(f"💰 {format_money(line.unit_price)}")
    parts = [
        heading("Item added!"),
        "",
        f"*{line.name}*",
        *detail,
        "",
        "🛒 *Your cart:*",
        *format_line_items(lines),
        "",
        f"💰 Total: {format_money(standard.total)}",
        f"💚 Total with {store.payment_methods[0]}: {format_money(discounted.total)}",
    ]
    return "\n".join(parts)


def after_add_menu() -> ChoiceList:
    rows = [
        ChoiceRow("Continue shopping", AFTER_CONTINUE, "See more products"),
        ChoiceRow("View cart", AFTER_CART, "Review your order"),
        ChoiceRow("Checkout", AFTER_CHECKOUT, "Confirm and pay"),
    ]
    return single_section(
        "Next steps",
        rows,
        prompt="What would you like to do next?",
        footer="Or type the option number",
    )


def cart_summary_text(
    lines: Sequence[LineItem],
    standard: CartTotals,
    discounted: CartTotals,
    store: StoreConfig,
) -> str:
    if not lines:
        return (
            f"{heading('Your cart')}\n\n🛒 Your cart is empty.\n\n"
            "Type *catalog* to see our products."
        )
    parts = [
        heading("Your cart"),
        "",
        *format_line_items(lines),
        "",
        RULE,
        f"💰 Total: {format_money(standard.total)}",
        f"💚 Total with {store.payment_methods[0]} ({_discount_percent()} off): "
        f"{format_money(discounted.total)}",
        "",
        "• Type *order* to check out",
        "• Type *clear* to empty the cart",
        "• Type *remove <number>* to remove an item",
    ]
    return "\n".join(parts)


def help_text() -> str:
    return "\n".join(
        [
            heading("Commands"),
            "",
            "• *menu*: main menu",
            "• *catalog*: browse products",
            "• *cart*: view your cart",
            "• *order*: check out",
            "• *clear*: empty your cart",
            "• *remove <number>*: remove a cart item",
            "• *help*: show this message",
            "",
            "You can also just ask me questions!",
        ]
    )


def promotions_text(store: StoreConfig) -> str:
    return "\n".join(
        [
            heading("Today's promotions"),
            "",
            f"💚 *{_discount_percent()} off* paying with {store.payment_methods[0]}",
            f"🚚 Delivery in {store.city}",
            "📦 Special prices on large special orders",
            "",
            "Type *catalog* to see the products.",
        ]
    )


def special_orders_text(store: StoreConfig) -> str:
    return "\n".join(
        [
            heading("Special orders"),
            "",
            "We cater parties, events, offices and celebrations.",
            "",
            f"📱 Talk to us: {store.contact_phone}",
            f"⏰ Minimum lead time: {store.order_lead_time}",
            f"💳 Payment: {', '.join(store.payment_methods)}",
        ]
    )


def attendant_text(store: StoreConfig) -> str:
    return "\n".join(
        [
            heading("Talk to an attendant"),
            "",
            f"📱 Phone: {store.contact_phone}",
            f"📍 {store.city}",
            "",
            f"⏰ Opening hours: {store.business_hours}",
        ]
    )


def about_text(store: StoreConfig) -> str:
    methods = [f"• {store.payment_methods[0]} ({_discount_percent()} off)"]
    methods.extend(f"• {method}" for method in store.payment_methods[1:])
    return "\n".join(
        [
            heading(store.name),
            "",
            store.tagline,
            "",
            f"📍 Location: {store.city}",
            f"🚚 Delivery: {store.city}",
            "",
            "💳 *Payment methods:*",
            *methods,
        ]
    )


def cleared_text() -> str:
    return "🛒 Cart emptied.\n\nType *menu* to continue."


def removed_text(removed: bool) -> str:
    if removed:
        return "Item removed.\n\nType *cart* to view your cart."
    return "❌ Item not found."


__all__ = [
    "about_text",
    "action_menu",
    "added_text",
    "after_add_menu",
    "attendant_text",
    "cart_summary_text",
    "category_menu",
    "cleared_text",
    "empty_category_text",
    "help_text",
    "main_menu",
    "product_detail_text",
    "product_images",
    "product_menu",
    "promotions_text",
    "removed_text",
    "size_menu",
    "special_orders_text",
    "variant_menu",
]
