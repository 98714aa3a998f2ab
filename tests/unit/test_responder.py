"""Chat-model responder: prompt, history, cart context and retry policy."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from orderrouter.core.config import Config
from orderrouter.core.exceptions import ConfigurationError
from orderrouter.modules.responders import ChatModelResponder, StaticResponder, create_chat_model
from orderrouter.modules.responders.chat_model import with_cart_context
from orderrouter.modules.responders.prompts import build_system_prompt


@pytest.fixture
def fast_config(config) -> Config:
    config.llm.retry_backoff_sec = 0
    config.llm.max_retries = 3
    return config


def mock_model(*results) -> MagicMock:
    model = MagicMock()
    model.ainvoke = AsyncMock(side_effect=list(results))
    return model


class TestPrompt:
    def test_prompt_lists_store_and_catalog(self, store_config, categories, products):
        prompt = build_system_prompt(store_config, categories, products)

        assert store_config.name in prompt
        assert store_config.contact_phone in prompt
        assert "- Fried Snacks: Hot and crispy" in prompt
        assert "- Chicken Croquette (fried-snacks): $8.00 | Sizes: 6 units, 12 units" in prompt
        assert "Shrimp Pastry (fried-snacks): $9.50 | OUT OF STOCK" in prompt
        assert "Pix (5% off)" in prompt

    def test_prompt_with_empty_catalog(self, store_config):
        prompt = build_system_prompt(store_config, [], [])

        assert "Catalog being updated..." in prompt

    def test_cart_context_suffix(self):
        text = with_cart_context("hi", {"item_count": 2, "subtotal": Decimal("16")})

        assert text == "hi\n\n[Context: customer has 2 item(s) in the cart, subtotal $16.00]"
        assert with_cart_context("hi", None) == "hi"


class TestGenerate:
    @pytest.mark.asyncio
    async def test_answers_with_fake_model(self, fast_config, catalog):
        responder = ChatModelResponder(
            fast_config, catalog, model=FakeListChatModel(responses=["Yes, every day! 🥟"])
        )

        answer = await responder.generate("Do you deliver?", "u1")

        assert answer == "Yes, every day! 🥟"
        history = [m.content for m in responder.history("u1")]
        assert history == ["Do you deliver?", "Yes, every day! 🥟"]

    @pytest.mark.asyncio
    async def test_messages_sent_to_model(self, fast_config, catalog):
        model = mock_model(AIMessage(content="first"), AIMessage(content="second"))
        responder = ChatModelResponder(fast_config, catalog, model=model)

        await responder.generate("hello", "u1")
        await responder.generate("and pies?", "u1", {"item_count": 1, "subtotal": Decimal("8")})

        messages = model.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert "Chicken Croquette" in messages[0].content
        assert [type(m) for m in messages[1:]] == [HumanMessage, AIMessage, HumanMessage]
        assert messages[-1].content.endswith("subtotal $8.00]")
        # history keeps the raw text only
        assert responder.history("u1")[-2].content == "and pies?"

    @pytest.mark.asyncio
    async def test_history_is_bounded_and_per_user(self, fast_config, catalog):
        fast_config.llm.history_limit = 4
        model = mock_model(*(AIMessage(content=f"a{i}") for i in range(4)))
        responder = ChatModelResponder(fast_config, catalog, model=model)

        for i in range(3):
            await responder.generate(f"q{i}", "u1")
        await responder.generate("other", "u2")

        assert [m.content for m in responder.history("u1")] == ["q1", "a1", "q2", "a2"]
        assert [m.content for m in responder.history("u2")] == ["other", "a3"]

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, fast_config, catalog):
        model = mock_model(RuntimeError("503"), AIMessage(content="ok"))
        responder = ChatModelResponder(fast_config, catalog, model=model)

        assert await responder.generate("hi", "u1") == "ok"
        assert model.ainvoke.await_count == 2

    @pytest.mark.asyncio
    async def test_exhaustion_returns_none(self, fast_config, catalog):
        model = mock_model(*(RuntimeError("down") for _ in range(3)))
        responder = ChatModelResponder(fast_config, catalog, model=model)

        assert await responder.generate("hi", "u1") is None
        assert model.ainvoke.await_count == 3
        assert responder.history("u1") == []

    @pytest.mark.asyncio
    async def test_empty_answer_is_retried(self, fast_config, catalog):
        model = mock_model(AIMessage(content="  "), AIMessage(content="there"))
        responder = ChatModelResponder(fast_config, catalog, model=model)

        assert await responder.generate("hi", "u1") == "there"

    @pytest.mark.asyncio
    async def test_catalog_failure_still_answers(self, fast_config):
        catalog = MagicMock()
        catalog.get_categories = AsyncMock(side_effect=RuntimeError("catalog down"))
        model = mock_model(AIMessage(content="fine"))
        responder = ChatModelResponder(fast_config, catalog, model=model)

        assert await responder.generate("hi", "u1") == "fine"

    @pytest.mark.asyncio
    async def test_missing_api_key_returns_none(self, fast_config, catalog):
        fast_config.google.api_key = ""
        responder = ChatModelResponder(fast_config, catalog)

        assert await responder.generate("hi", "u1") is None


class TestCreateChatModel:
    def test_requires_api_key(self, config):
        config.google.api_key = ""

        with pytest.raises(ConfigurationError):
            create_chat_model(config)

    def test_builds_gemini_model(self, config):
        config.google.api_key = "test-key"

        llm = create_chat_model(config)

        assert "gemini-2.5-flash" in llm.model
        assert llm.max_retries == 0


@pytest.mark.asyncio
async def test_static_responder():
    assert await StaticResponder("hi").generate("x", "u1") == "hi"
    assert await StaticResponder().generate("x", "u1") is None
