"""Per-user navigation state machine.

Handles browsing (categories, products, product details), size and variant
selection, the post-add screen and the idle-state commands. The machine only
decides: `handle()` returns a `Reply` and never touches the transport.
"""

from __future__ import annotations

import logging

from orderrouter.core.config import StoreConfig
from orderrouter.core.session_store import InMemoryStore, KeyedStore
from orderrouter.core.types import Category, InboundMessage, Product
from orderrouter.cortex.presentation.actions import OutboundChoices, OutboundText, Reply
from orderrouter.cortex.presentation.choices import ChoiceRow, resolve_choice
from orderrouter.cortex.services.cart import DEFAULT_VARIANT, UNIT_SIZE, CartService
from orderrouter.modules.catalog.base import CatalogStore

from . import screens
from .keywords import is_back, is_checkout_trigger, is_home, looks_like_question, normalize
from .state import (
    IDLE,
    AddingToCart,
    AddStep,
    AfterAddToCart,
    BrowsingCategories,
    Idle,
    NavigationState,
    ViewingProductDetails,
    ViewingProducts,
)

logger = logging.getLogger(__name__)

# Plain-word shortcuts for main-menu rows while idle.
_IDLE_ALIASES = {
    "catalog": screens.MENU_CATALOG,
    "products": screens.MENU_CATALOG,
    "promo": screens.MENU_PROMO,
    "promotions": screens.MENU_PROMO,
    "attendant": screens.MENU_ATTENDANT,
    "about": screens.MENU_ABOUT,
}


def _row_index(row: ChoiceRow) -> int:
    return int(row.selection_id.rsplit(":", 1)[1])


class NavigationMachine:
    def __init__(
        self,
        catalog: CatalogStore,
        cart: CartService,
        store: StoreConfig,
        *,
        sessions: KeyedStore[NavigationState] | None = None,
        image_base_url: str = "",
    ) -> None:
        self._catalog = catalog
        self._cart = cart
        self._store = store
        self._sessions: KeyedStore[NavigationState] = (
            sessions if sessions is not None else InMemoryStore(name="navigation")
        )
        self._image_base_url = image_base_url

    # ---- session ---------------------------------------------------------

    async def get_state(self, user_id: str) -> NavigationState:
        return await self._sessions.get(user_id) or IDLE

    async def _set_state(self, user_id: str, state: NavigationState) -> None:
        if isinstance(state, Idle):
            await self._sessions.delete(user_id)
        else:
            await self._sessions.set(user_id, state)

    async def reset(self, user_id: str) -> None:
        await self._sessions.delete(user_id)

    # ---- entry point -----------------------------------------------------

    async def handle(self, message: InboundMessage) -> Reply:
        user_id = message.sender
        state = await self.get_state(user_id)
        text = message.text

        if message.is_selection and message.selection_id.startswith("menu:"):
            return await self._main_menu_row(user_id, message.selection_id)

        if not isinstance(state, Idle) and not message.is_selection:
            if is_home(text):
                return await self.show_main_menu(user_id)
            if is_back(text):
                return await self._go_back(user_id, state)

        if not message.is_selection:
            command = await self._global_command(user_id, text)
            if command is not None:
                return command

        if isinstance(state, Idle):
            return await self._idle(user_id, message)
        if isinstance(state, BrowsingCategories):
            return await self._browsing_categories(user_id, message)
        if isinstance(state, ViewingProducts):
            return await self._viewing_products(user_id, state, message)
        if isinstance(state, ViewingProductDetails):
            return await self._viewing_details(user_id, state, message)
        if isinstance(state, AddingToCart):
            return await self._adding_to_cart(user_id, state, message)
        if isinstance(state, AfterAddToCart):
            return await self._after_add(user_id, message)
        raise TypeError(f"Unknown navigation state: {state!r}")

    # ---- screens ---------------------------------------------------------

    async def show_main_menu(self, user_id: str) -> Reply:
        await self._set_state(user_id, IDLE)
        return Reply.of(OutboundChoices(screens.main_menu(self._store)))

    async def _show_categories(self, user_id: str) -> Reply:
        categories = await self._catalog.get_categories()
        await self._set_state(user_id, BrowsingCategories())
        return Reply.of(OutboundChoices(screens.category_menu(self._store, categories)))

    async def _show_products(self, user_id: str, category: Category) -> Reply:
        products = await self._catalog.get_products_by_category(category.id)
        if not products:
            await self._set_state(user_id, BrowsingCategories())
            return Reply.text(screens.empty_category_text(category))
        await self._set_state(user_id, ViewingProducts(category=category))
        return Reply.of(OutboundChoices(screens.product_menu(category, products)))

    async def _show_product(self, user_id: str, category: Category, product: Product) -> Reply:
        await self._set_state(user_id, ViewingProductDetails(category=category, product=product))
        return Reply.of(
            *screens.product_images(product, self._image_base_url),
            OutboundText(screens.product_detail_text(product, category)),
            OutboundChoices(screens.action_menu(category)),
        )

    async def _show_cart(self, user_id: str) -> Reply:
        lines = await self._cart.list_items(user_id)
        standard = await self._cart.compute_totals(user_id, False)
        discounted = await self._cart.compute_totals(user_id, True)
        return Reply.text(screens.cart_summary_text(lines, standard, discounted, self._store))

    # ---- cross-cutting ---------------------------------------------------

    async def _go_back(self, user_id: str, state: NavigationState) -> Reply:
        logger.debug("Back from %s for %s", state.name, user_id)
        if isinstance(state, ViewingProducts):
            return await self._show_categories(user_id)
        if isinstance(state, ViewingProductDetails):
            return await self._show_products(user_id, state.category)
        if isinstance(state, AddingToCart):
            return await self._show_product(user_id, state.category, state.product)
        # browsing_categories and after_add_to_cart both go back to the main menu
        return await self.show_main_menu(user_id)

    async def _global_command(self, user_id: str, text: str) -> Reply | None:
        lowered = normalize(text)
        if lowered == "help":
            return Reply.text(screens.help_text())
        if lowered == "cart":
            return await self._show_cart(user_id)
        if lowered in ("clear", "clear cart"):
            await self._cart.clear(user_id)
            await self._set_state(user_id, IDLE)
            return Reply.text(screens.cleared_text())
        if lowered.startswith("remove "):
            raw = lowered.removeprefix("remove ").strip()
            removed = raw.isdecimal() and await self._cart.remove_item(user_id, int(raw) - 1)
            return Reply.text(screens.removed_text(removed))
        return None

    async def _main_menu_row(self, user_id: str, selection_id: str) -> Reply:
        if selection_id == screens.MENU_CATALOG:
            return await self._show_categories(user_id)
        if selection_id == screens.MENU_CHECKOUT:
            await self._set_state(user_id, IDLE)
            return Reply(handled=True, checkout_requested=True)

        await self._set_state(user_id, IDLE)
        if selection_id == screens.MENU_CART:
            return await self._show_cart(user_id)
        if selection_id == screens.MENU_PROMO:
            return Reply.text(screens.promotions_text(self._store))
        if selection_id == screens.MENU_SPECIAL_ORDERS:
            return Reply.text(screens.special_orders_text(self._store))
        if selection_id == screens.MENU_ATTENDANT:
            return Reply.text(screens.attendant_text(self._store))
        if selection_id == screens.MENU_ABOUT:
            return Reply.text(screens.about_text(self._store))
        return await self.show_main_menu(user_id)

    # ---- states ----------------------------------------------------------

    async def _idle(self, user_id: str, message: InboundMessage) -> Reply:
        lowered = normalize(message.text)
        if lowered in _IDLE_ALIASES:
            return await self._main_menu_row(user_id, _IDLE_ALIASES[lowered])
        if is_home(lowered) or is_back(lowered):
            return await self.show_main_menu(user_id)

        row = resolve_choice(screens.main_menu(self._store), message.selection_id, message.text)
        if row is not None:
            return await self._main_menu_row(user_id, row.selection_id)
        if message.is_selection:
            # stale list from an earlier screen
            return await self.show_main_menu(user_id)
        return Reply.not_handled()

    async def _browsing_categories(self, user_id: str, message: InboundMessage) -> Reply:
        if not message.is_selection and looks_like_question(message.text):
            return Reply.not_handled()

        categories = await self._catalog.get_categories()
        row = resolve_choice(
            screens.category_menu(self._store, categories), message.selection_id, message.text
        )
        if row is None:
            return Reply.text("❌ Invalid category. Type the number or *menu* to go back.")
        category = next(
            c for c in categories if screens.category_selection_id(c) == row.selection_id
        )
        return await self._show_products(user_id, category)

    async def _viewing_products(
        self, user_id: str, state: ViewingProducts, message: InboundMessage
    ) -> Reply:
        if not message.is_selection and looks_like_question(message.text):
            return Reply.not_handled()

        products = await self._catalog.get_products_by_category(state.category.id)
        row = resolve_choice(
            screens.product_menu(state.category, products), message.selection_id, message.text
        )
        if row is None:
            return Reply.text("❌ Invalid product. Type the number or *menu* to go back.")
        product = next(p for p in products if screens.product_selection_id(p) == row.selection_id)
        return await self._show_product(user_id, state.category, product)

    async def _viewing_details(
        self, user_id: str, state: ViewingProductDetails, message: InboundMessage
    ) -> Reply:
        if not message.is_selection and looks_like_question(message.text):
            return Reply.not_handled()

        row = resolve_choice(
            screens.action_menu(state.category), message.selection_id, message.text
        )
        if row is None:
            return Reply.text("❌ Invalid option. Type 1, 2 or 3.")
        if row.selection_id == screens.ACTION_ADD:
            return await self._begin_add(user_id, state.category, state.product)
        if row.selection_id == screens.ACTION_OTHER:
            return await self._show_products(user_id, state.category)
        return await self._show_categories(user_id)

    async def _begin_add(self, user_id: str, category: Category, product: Product) -> Reply:
        if product.size_options:
            await self._set_state(
                user_id, AddingToCart(category=category, product=product, step=AddStep.SIZE)
            )
            return Reply.of(OutboundChoices(screens.size_menu(product)))
        if product.variant_options:
            await self._set_state(
                user_id,
                AddingToCart(
                    category=category, product=product, step=AddStep.VARIANT, size=UNIT_SIZE
                ),
            )
            return Reply.of(OutboundChoices(screens.variant_menu(product, UNIT_SIZE)))
        return await self._commit(user_id, product, UNIT_SIZE, DEFAULT_VARIANT)

    async def _adding_to_cart(
        self, user_id: str, state: AddingToCart, message: InboundMessage
    ) -> Reply:
        if not message.is_selection and looks_like_question(message.text):
            return Reply.not_handled()

        product = state.product
        if state.step is AddStep.SIZE:
            row = resolve_choice(screens.size_menu(product), message.selection_id, message.text)
            if row is None:
                return Reply.text(
                    "❌ Invalid size. Pick a number from the list or type *cancel* to go back."
                )
            size = product.size_options[_row_index(row)]
            if product.variant_options:
                await self._set_state(
                    user_id,
                    AddingToCart(
                        category=state.category, product=product, step=AddStep.VARIANT, size=size
                    ),
                )
                return Reply.of(OutboundChoices(screens.variant_menu(product, size)))
            return await self._commit(user_id, product, size, DEFAULT_VARIANT)

        size = state.size or UNIT_SIZE
        row = resolve_choice(
            screens.variant_menu(product, size), message.selection_id, message.text
        )
        if row is None:
            return Reply.text("❌ Invalid option. Pick a number from the list.")
        return await self._commit(user_id, product, size, product.variant_options[_row_index(row)])

    async def _commit(self, user_id: str, product: Product, size: str, variant: str) -> Reply:
        result = await self._cart.add_item(user_id, product.id, size, variant)
        if not result.ok:
            await self._set_state(user_id, IDLE)
            return Reply.text(f"❌ {result.error.message}\n\nType *menu* to continue.")

        lines = await self._cart.list_items(user_id)
        standard = await self._cart.compute_totals(user_id, False)
        discounted = await self._cart.compute_totals(user_id, True)
        await self._set_state(user_id, AfterAddToCart())
        return Reply.of(
            OutboundText(screens.added_text(result.line, lines, standard, discounted, self._store)),
            OutboundChoices(screens.after_add_menu()),
        )

    async def _after_add(self, user_id: str, message: InboundMessage) -> Reply:
        if not message.is_selection and is_checkout_trigger(message.text):
            await self._set_state(user_id, IDLE)
            return Reply(handled=True, checkout_requested=True)

        row = resolve_choice(screens.after_add_menu(), message.selection_id, message.text)
        if row is None:
            return Reply.text("❌ Invalid option. Type 1, 2 or 3.")
        if row.selection_id == screens.AFTER_CONTINUE:
            return await self._show_categories(user_id)

        await self._set_state(user_id, IDLE)
        if row.selection_id == screens.AFTER_CART:
            return await self._show_cart(user_id)
        return Reply(handled=True, checkout_requested=True)


__all__ = ["NavigationMachine"]
