"""
LLM client wrapper for chat completions.
Designed to be provider-agnostic (OpenAI-compatible API), so Gemini's
OpenAI endpoint works by setting LLM_BASE_URL.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from openai import OpenAI

from roadtrip.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Models sometimes wrap JSON in prose or ```json fences
_JSON_BLOCK = re.compile(r"(\{.*\}|\[.*\])", re.DOTALL)


class LLMClient:
    """Wrapper for LLM chat operations."""

    def __init__(self):
        self.client = OpenAI(
            api_key=settings.llm_api_key or "missing-key",
            base_url=settings.llm_base_url,
        )
        self.chat_model = settings.llm_chat_model
        self.configured = bool(settings.llm_api_key)
        if not self.configured:
            logger.warning("LLM_API_KEY not set; recommendations will fall back")

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate a chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature (defaults to LLM_TEMPERATURE)
            max_tokens: Maximum tokens in response (defaults to LLM_MAX_TOKENS)

        Returns:
            The assistant's response content
        """
        if not self.configured:
            raise RuntimeError("LLM API key is not configured")

        try:
            kwargs: Dict[str, Any] = {
                "model": self.chat_model,
                "messages": messages,
                "temperature": settings.llm_temperature if temperature is None else temperature,
                "max_tokens": max_tokens or settings.llm_max_tokens,
            }

            response = self.client.chat.completions.create(**kwargs)
            return response.choices[0].message.content or ""

        except Exception as e:
            logger.error(f"LLM chat error: {e}")
            raise

    def chat_json(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
    ) -> Any:
        """
        Generate a chat completion and parse as JSON.

        Returns:
            Parsed JSON response (object or array)
        """
        response = self.chat(messages=messages, temperature=temperature)
        return parse_json_response(response)


def parse_json_response(text: str) -> Any:
    """
    Parse JSON from model output, tolerating text around it.

    Raises:
        ValueError: If no JSON value can be recovered.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    match = _JSON_BLOCK.search(text or "")
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM JSON response: {text[:500]}")
            raise ValueError(f"Invalid JSON from LLM: {e}")

    logger.error(f"No JSON found in LLM response: {(text or '')[:500]}")
    raise ValueError("Invalid JSON from LLM: no JSON value in response")


# Singleton instance
_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the LLM client singleton."""
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
