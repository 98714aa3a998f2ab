"""Responder model and LLM request configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ModelsConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Gemini model id used by the fallback responder.
    responder_llm: str = "gemini-2.5-flash"


class LLMConfig(BaseModel):
    """Provider-agnostic LLM request controls.

    `max_retries` counts whole responder attempts, not SDK-level retries; the
    chat model itself is always built with SDK retries disabled.
    """

    model_config = ConfigDict(extra="ignore")

    temperature: float = 0.7
    max_output_tokens: int = 500
    timeout_sec: float = 30.0
    max_retries: int = 3
    retry_backoff_sec: float = 2.0
    history_limit: int = 20


class GoogleConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    api_key: str = ""
