"""Navigation state machine: browsing, adding to cart, back navigation, idle commands."""

from __future__ import annotations

from decimal import Decimal

import pytest
import pytest_asyncio

from orderrouter.core.session_store import InMemoryStore
from orderrouter.core.types import Product
from orderrouter.cortex.flows.navigation import (
    AddingToCart,
    AddStep,
    AfterAddToCart,
    BrowsingCategories,
    Idle,
    NavigationMachine,
    ViewingProductDetails,
    ViewingProducts,
)
from orderrouter.cortex.flows.navigation.keywords import looks_like_question
from orderrouter.cortex.presentation import OutboundChoices, OutboundImage, OutboundText
from orderrouter.cortex.services.cart import CartService


@pytest.fixture
def sessions() -> InMemoryStore:
    return InMemoryStore(name="navigation")


@pytest.fixture
def cart(catalog) -> CartService:
    return CartService(catalog)


@pytest.fixture
def machine(catalog, cart, store_config, sessions) -> NavigationMachine:
    return NavigationMachine(catalog, cart, store_config, sessions=sessions)


def texts(reply) -> list[str]:
    return [a.text for a in reply.actions if isinstance(a, OutboundText)]


def lists(reply):
    return [a.choices for a in reply.actions if isinstance(a, OutboundChoices)]


def labels(choice_list) -> list[str]:
    return [row.label for row in choice_list.rows()]


async def drive(machine, text, *bodies):
    reply = None
    for body in bodies:
        reply = await machine.handle(text(body))
    return reply


# ---------------------------------------------------------------------------
# Idle state
# ---------------------------------------------------------------------------


class TestIdle:
    @pytest.mark.asyncio
    async def test_menu_shows_three_sections_seven_rows(self, machine, text):
        reply = await machine.handle(text("menu"))

        assert reply.handled
        (menu,) = lists(reply)
        assert [s.title for s in menu.sections] == ["Catalog", "Orders", "Service"]
        assert len(menu) == 7

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["catalog", "products", "1", "Browse catalog"])
    async def test_browse_triggers(self, machine, text, body):
        reply = await machine.handle(text(body))

        assert reply.handled
        assert await machine.get_state("user-1") == BrowsingCategories()
        assert labels(lists(reply)[0]) == ["🔥 Fried Snacks", "🥧 Pies", "📦 Empty Shelf"]

    @pytest.mark.asyncio
    async def test_place_order_requests_checkout(self, machine, text):
        reply = await machine.handle(text("4"))

        assert reply.handled
        assert reply.checkout_requested
        assert reply.actions == ()

    @pytest.mark.asyncio
    async def test_place_order_selection_requests_checkout(self, machine, tap):
        reply = await machine.handle(tap("menu:checkout"))

        assert reply.checkout_requested

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "fragment"),
        [
            ("2", "promotions"),
            ("5", "Special orders"),
            ("attendant", "Opening hours"),
            ("7", "Payment methods"),
            ("help", "*remove <number>*"),
        ],
    )
    async def test_information_screens(self, machine, text, body, fragment):
        reply = await machine.handle(text(body))

        assert fragment.lower() in texts(reply)[0].lower()
        assert isinstance(await machine.get_state("user-1"), Idle)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["hello there", "12", "Do you deliver on Sundays?"])
    async def test_unknown_text_not_handled(self, machine, text, body):
        reply = await machine.handle(text(body))

        assert not reply.handled
        assert reply.actions == ()

    @pytest.mark.asyncio
    async def test_stale_selection_shows_main_menu(self, machine, tap):
        reply = await machine.handle(tap("size:1"))

        assert reply.handled
        assert len(lists(reply)[0]) == 7


# ---------------------------------------------------------------------------
# Browsing
# ---------------------------------------------------------------------------


class TestBrowsing:
    @pytest.mark.asyncio
    async def test_category_lists_in_stock_products_only(self, machine, text, categories):
        reply = await drive(machine, text, "catalog", "1")

        assert await machine.get_state("user-1") == ViewingProducts(category=categories[0])
        assert labels(lists(reply)[0]) == ["Chicken Croquette", "Cheese Pastry"]

    @pytest.mark.asyncio
    async def test_category_by_selection_id(self, machine, text, tap, categories):
        await machine.handle(text("catalog"))
        reply = await machine.handle(tap("cat:pies"))

        assert await machine.get_state("user-1") == ViewingProducts(category=categories[1])
        assert labels(lists(reply)[0]) == ["Chicken Pie", "Veggie Pie"]

    @pytest.mark.asyncio
    async def test_empty_category_stays_in_categories(self, machine, text):
        reply = await drive(machine, text, "catalog", "3")

        assert "No products available" in texts(reply)[0]
        assert await machine.get_state("user-1") == BrowsingCategories()

    @pytest.mark.asyncio
    async def test_invalid_category_reprompts(self, machine, text):
        reply = await drive(machine, text, "catalog", "9")

        assert texts(reply)[0].startswith("❌ Invalid category")
        assert await machine.get_state("user-1") == BrowsingCategories()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["²", "³"])
    async def test_superscript_digit_reprompts(self, machine, text, value):
        reply = await drive(machine, text, "catalog", value)

        assert texts(reply)[0].startswith("❌ Invalid category")
        assert await machine.get_state("user-1") == BrowsingCategories()

    @pytest.mark.asyncio
    async def test_product_details_send_images_first(self, machine, text, categories, products):
        reply = await drive(machine, text, "catalog", "1", "1")

        first, second, third = reply.actions
        assert isinstance(first, OutboundImage)
        assert first.url == "https://cdn.example.com/croquette.jpg"
        assert isinstance(second, OutboundText) and "Chicken Croquette" in second.text
        assert labels(third.choices) == ["Add to cart", "See other products", "Back to categories"]
        assert await machine.get_state("user-1") == ViewingProductDetails(
            category=categories[0], product=products[0]
        )

    @pytest.mark.asyncio
    async def test_question_while_viewing_products_is_declined(self, machine, text):
        await drive(machine, text, "catalog", "1")
        before = await machine.get_state("user-1")

        reply = await machine.handle(text("Do you deliver on Sundays?"))

        assert not reply.handled
        assert await machine.get_state("user-1") == before

    @pytest.mark.asyncio
    async def test_selection_wins_over_question_guard(self, machine, text, tap):
        await drive(machine, text, "catalog", "1")

        reply = await machine.handle(tap("prod:pastry", body="How much is the cheese pastry?"))

        assert reply.handled
        assert isinstance(await machine.get_state("user-1"), ViewingProductDetails)

    @pytest.mark.asyncio
    async def test_other_products_and_categories_actions(self, machine, text):
        await drive(machine, text, "catalog", "1", "1")
        await machine.handle(text("2"))
        assert isinstance(await machine.get_state("user-1"), ViewingProducts)

        await machine.handle(text("1"))
        await machine.handle(text("3"))
        assert await machine.get_state("user-1") == BrowsingCategories()


# ---------------------------------------------------------------------------
# Adding to cart
# ---------------------------------------------------------------------------


class TestAddToCart:
    @pytest.mark.asyncio
    async def test_size_only_product(self, machine, cart, text):
        reply = await drive(machine, text, "catalog", "1", "1", "1", "12 units")

        (line,) = await cart.list_items("user-1")
        assert (line.unit_price, line.size, line.variant, line.quantity) == (
            Decimal("8.00"),
            "12 units",
            "Standard",
            1,
        )
        assert await machine.get_state("user-1") == AfterAddToCart()
        assert "ITEM ADDED" in texts(reply)[0]
        assert labels(lists(reply)[0]) == ["Continue shopping", "View cart", "Checkout"]

    @pytest.mark.asyncio
    async def test_size_then_variant(self, machine, cart, text):
        reply = await drive(machine, text, "catalog", "1", "2", "1", "2")

        assert labels(lists(reply)[0]) == ["Mozzarella", "Cheddar"]
        state = await machine.get_state("user-1")
        assert isinstance(state, AddingToCart)
        assert (state.step, state.size) == (AddStep.VARIANT, "12 units")

        await machine.handle(text("2"))
        (line,) = await cart.list_items("user-1")
        assert (line.size, line.variant) == ("12 units", "Cheddar")

    @pytest.mark.asyncio
    async def test_variants_without_sizes_skip_size_step(self, machine, cart, text, tap):
        reply = await drive(machine, text, "catalog", "2", "1", "1")

        state = await machine.get_state("user-1")
        assert (state.step, state.size) == (AddStep.VARIANT, "Unit")
        assert labels(lists(reply)[0]) == ["Classic crust", "Whole wheat crust"]

        await machine.handle(tap("variant:1"))
        (line,) = await cart.list_items("user-1")
        assert (line.size, line.variant) == ("Unit", "Whole wheat crust")

    @pytest.mark.asyncio
    async def test_no_options_commits_immediately(self, machine, cart, text):
        await drive(machine, text, "catalog", "2", "2", "1")

        (line,) = await cart.list_items("user-1")
        assert (line.product_id, line.size, line.variant) == ("veggie-pie", "Unit", "Standard")
        assert await machine.get_state("user-1") == AfterAddToCart()

    @pytest.mark.asyncio
    async def test_invalid_size_reprompts(self, machine, text):
        await drive(machine, text, "catalog", "1", "1", "1")

        reply = await machine.handle(text("7"))

        assert texts(reply)[0].startswith("❌ Invalid size")
        assert (await machine.get_state("user-1")).step is AddStep.SIZE

    @pytest.mark.asyncio
    async def test_failed_add_returns_to_idle(self, machine, cart, sessions, categories, text):
        ghost = Product(id="ghost", name="Ghost", price=Decimal("1.00"), sizes=["1 unit"])
        await sessions.set(
            "user-1", AddingToCart(category=categories[0], product=ghost, step=AddStep.SIZE)
        )

        reply = await machine.handle(text("1"))

        assert "Product not found" in texts(reply)[0]
        assert isinstance(await machine.get_state("user-1"), Idle)
        assert await cart.is_empty("user-1")


class TestAfterAdd:
    @pytest_asyncio.fixture
    async def added(self, machine, text):
        await drive(machine, text, "catalog", "2", "2", "1")

    @pytest.mark.asyncio
    async def test_continue_shopping(self, machine, text, added):
        await machine.handle(text("1"))

        assert await machine.get_state("user-1") == BrowsingCategories()

    @pytest.mark.asyncio
    async def test_view_cart(self, machine, text, added):
        reply = await machine.handle(text("2"))

        assert "Veggie Pie" in texts(reply)[0]
        assert isinstance(await machine.get_state("user-1"), Idle)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["3", "checkout", "order"])
    async def test_checkout_request(self, machine, text, added, body):
        reply = await machine.handle(text(body))

        assert reply.handled and reply.checkout_requested
        assert isinstance(await machine.get_state("user-1"), Idle)

    @pytest.mark.asyncio
    async def test_invalid_option(self, machine, text, added):
        reply = await machine.handle(text("9"))

        assert texts(reply) == ["❌ Invalid option. Type 1, 2 or 3."]
        assert await machine.get_state("user-1") == AfterAddToCart()


# ---------------------------------------------------------------------------
# Cancel / back
# ---------------------------------------------------------------------------


class TestCancelKeywords:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            (["catalog"], Idle),
            (["catalog", "1"], BrowsingCategories),
            (["catalog", "1", "1"], ViewingProducts),
            (["catalog", "1", "1", "1"], ViewingProductDetails),
            (["catalog", "2", "2", "1"], Idle),
        ],
    )
    async def test_back_goes_one_level_up(self, machine, text, path, expected):
        await drive(machine, text, *path)

        reply = await machine.handle(text("back"))

        assert reply.handled
        assert isinstance(await machine.get_state("user-1"), expected)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("word", ["menu", "HOME", " start "])
    async def test_home_from_any_depth(self, machine, text, word):
        await drive(machine, text, "catalog", "1", "1", "1")

        reply = await machine.handle(text(word))

        assert isinstance(await machine.get_state("user-1"), Idle)
        assert len(lists(reply)[0]) == 7

    @pytest.mark.asyncio
    async def test_cancel_from_size_step_reshows_product(self, machine, text):
        await drive(machine, text, "catalog", "1", "1", "1")

        reply = await machine.handle(text("cancel"))

        assert isinstance(reply.actions[0], OutboundImage)
        assert isinstance(await machine.get_state("user-1"), ViewingProductDetails)


class TestGlobalCommands:
    @pytest.mark.asyncio
    async def test_cart_while_browsing_keeps_state(self, machine, text):
        await drive(machine, text, "catalog", "1")

        reply = await machine.handle(text("cart"))

        assert "Your cart is empty" in texts(reply)[0]
        assert isinstance(await machine.get_state("user-1"), ViewingProducts)

    @pytest.mark.asyncio
    async def test_remove_and_clear(self, machine, cart, text):
        await drive(machine, text, "catalog", "2", "2", "1")

        assert texts(await machine.handle(text("remove 5"))) == ["❌ Item not found."]
        assert texts(await machine.handle(text("remove ²"))) == ["❌ Item not found."]
        assert "Item removed" in texts(await machine.handle(text("remove 1")))[0]
        assert await cart.is_empty("user-1")

        await drive(machine, text, "menu", "catalog", "2", "2", "1")
        await machine.handle(text("clear cart"))
        assert await cart.is_empty("user-1")
        assert isinstance(await machine.get_state("user-1"), Idle)


class TestQuestionHeuristic:
    @pytest.mark.parametrize(
        "value",
        [
            "Do you deliver on Sundays?",
            "what is the price",
            "is it available",
            "i want six of those and then another six please",
        ],
    )
    def test_questions(self, value):
        assert looks_like_question(value)

    @pytest.mark.parametrize("value", ["1", "12", "12 units", "Cheddar", "Add to cart", "show"])
    def test_not_questions(self, value):
        assert not looks_like_question(value)
