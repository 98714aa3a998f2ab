"""LangChain chat-model responder (Gemini by default)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from orderrouter.core.config import Config
from orderrouter.core.exceptions import ConfigurationError, DependencyError
from orderrouter.modules.catalog.base import CatalogStore

from .base import Responder
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)


def create_chat_model(config: Config) -> BaseChatModel:
    """Gemini chat model built from config.

    SDK-level retries are disabled; `ChatModelResponder` owns the retry policy.
    """
    from langchain_google_genai import ChatGoogleGenerativeAI

    if not config.google.api_key:
        raise ConfigurationError("google.api_key is required for the chat responder")

    return ChatGoogleGenerativeAI(
        model=config.models.responder_llm,
        google_api_key=config.google.api_key,
        temperature=config.llm.temperature,
        max_output_tokens=config.llm.max_output_tokens,
        timeout=config.llm.timeout_sec,
        max_retries=0,
    )


def with_cart_context(text: str, cart_context: Mapping[str, Any] | None) -> str:
    if not cart_context:
        return text
    return (
        f"{text}\n\n[Context: customer has {cart_context['item_count']} item(s) in the cart, "
        f"subtotal ${cart_context['subtotal']:.2f}]"
    )


class ChatModelResponder(Responder):
    """Answers free text with a chat model, keeping a short per-user history.

    Only the raw user text and the model's answer go into history; the cart
    context is attached to the current turn only.
    """

    def __init__(
        self,
        config: Config,
        catalog: CatalogStore,
        *,
        model: BaseChatModel | None = None,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._model = model
        self._history: dict[str, list[BaseMessage]] = {}

    def _get_model(self) -> BaseChatModel:
        if self._model is None:
            self._model = create_chat_model(self._config)
            logger.info("Responder model initialized: %s", self._config.models.responder_llm)
        return self._model

    async def _system_prompt(self) -> str:
        try:
            categories = await self._catalog.get_categories()
            products = await self._catalog.get_all_products()
        except Exception as e:
            logger.warning("Catalog unavailable for responder prompt: %s", e)
            categories, products = [], []
        return build_system_prompt(self._config.store, categories, products)

    def history(self, user_id: str) -> list[BaseMessage]:
        return list(self._history.get(user_id, []))

    def _remember(self, user_id: str, text: str, answer: str) -> None:
        history = self._history.setdefault(user_id, [])
        history.extend([HumanMessage(content=text), AIMessage(content=answer)])
        limit = self._config.llm.history_limit
        if len(history) > limit:
            del history[: len(history) - limit]

    async def _ask(self, messages: list[BaseMessage]) -> str:
        try:
            response = await self._get_model().ainvoke(messages)
        except ConfigurationError:
            raise
        except Exception as e:
            raise DependencyError(f"chat model call failed: {e}") from e
        content = getattr(response, "content", "")
        answer = content if isinstance(content, str) else str(content)
        if not answer.strip():
            raise DependencyError("chat model returned an empty answer")
        return answer.strip()

    async def generate(
        self,
        text: str,
        user_id: str,
        cart_context: Mapping[str, Any] | None = None,
    ) -> str | None:
        llm_cfg = self._config.llm
        messages: list[BaseMessage] = [
            SystemMessage(content=await self._system_prompt()),
            *self._history.get(user_id, []),
            HumanMessage(content=with_cart_context(text, cart_context)),
        ]

        attempts = max(1, llm_cfg.max_retries)
        for attempt in range(1, attempts + 1):
            try:
                answer = await self._ask(messages)
            except ConfigurationError as e:
                logger.error("Responder not configured: %s", e)
                return None
            except DependencyError as e:
                logger.warning(
                    "Responder attempt %d/%d failed for %s: %s", attempt, attempts, user_id, e
                )
                if attempt == attempts:
                    logger.error("Responder gave up for %s after %d attempts", user_id, attempts)
                    return None
                await asyncio.sleep(llm_cfg.retry_backoff_sec * attempt)
                continue

            self._remember(user_id, text, answer)
            logger.debug("Responder answered %s on attempt %d", user_id, attempt)
            return answer
        return None


__all__ = ["ChatModelResponder", "create_chat_model", "with_cart_context"]
