"""Async OpenAI client wrapper for the short fortune texts."""

from __future__ import annotations

import os
from typing import Optional

from openai import AsyncOpenAI


class LLMUnavailableError(RuntimeError):
    """Raised when text cannot be generated."""


def _client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise LLMUnavailableError("OPENAI_API_KEY is not configured")

    org_id = os.getenv("OPENAI_ORG_ID")
    timeout = float(os.getenv("OPENAI_TIMEOUT", "60"))

    if org_id:
        return AsyncOpenAI(api_key=api_key, organization=org_id, timeout=timeout)
    return AsyncOpenAI(api_key=api_key, timeout=timeout)


async def generate_text(prompt: str, max_tokens: int = 300, model: Optional[str] = None) -> str:
    """Single-prompt completion; the prompt already carries its own instructions."""

    client = _client()
    model_name = model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    try:
        result = await client.chat.completions.create(
            model=model_name,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=0.7,
        )
    except Exception as exc:  # pragma: no cover - network interaction
        error_msg = str(exc)
        if "rate_limit" in error_msg.lower():
            raise LLMUnavailableError(f"OpenAI rate limit exceeded: {error_msg}") from exc
        elif "invalid_api_key" in error_msg.lower() or "authentication" in error_msg.lower():
            raise LLMUnavailableError(f"Invalid OpenAI API key: {error_msg}") from exc
        elif "timeout" in error_msg.lower() or "timed out" in error_msg.lower():
            raise LLMUnavailableError(
                f"OpenAI API error: Request timed out after {os.getenv('OPENAI_TIMEOUT', '60')}s"
            ) from exc
        raise LLMUnavailableError(f"OpenAI API error: {error_msg}") from exc

    content = result.choices[0].message.content if result.choices else ""
    text = (content or "").strip()
    if not text:
        raise LLMUnavailableError("OpenAI returned an empty response")
    return text
