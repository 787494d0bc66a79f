"""OpenRouter API client for LLM requests."""

import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


async def request_chat_completion(
    model: str,
    messages: List[Dict[str, Any]],
    api_key: str,
    system: Optional[str] = None,
    response_format: Optional[Dict[str, Any]] = None,
    max_tokens: Optional[int] = None,
    temperature: float = 0.7,
    timeout: float = 60.0,
    max_retries: int = 0,
) -> Dict[str, Any]:
    """Make a chat completion request to OpenRouter."""

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "HTTP-Referer": "https://github.com/health-concierge",
        "X-Title": "Health Concierge",
    }

    payload: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
    }

    if system:
        payload["messages"] = [{"role": "system", "content": system}] + messages

    if response_format:
        payload["response_format"] = response_format

    if max_tokens:
        payload["max_tokens"] = max_tokens

    logger.debug(f"Making OpenRouter request to {model}")

    base_delay = 1

    for attempt in range(max_retries + 1):
        async with httpx.AsyncClient(timeout=timeout) as client:
            try:
                response = await client.post(OPENROUTER_URL, headers=headers, json=payload)

                if response.status_code == 429 and attempt < max_retries:
                    delay = base_delay * (2 ** attempt)
                    logger.warning(f"Rate limited, retrying in {delay}s (attempt {attempt + 1}/{max_retries + 1})")
                    await asyncio.sleep(delay)
                    continue

                response.raise_for_status()
                result = response.json()
                logger.debug("OpenRouter response received")
                return result

            except httpx.HTTPError as e:
                if attempt == max_retries:
                    logger.error(f"OpenRouter API error after {max_retries + 1} attempts: {e}")
                    raise
                logger.warning(f"Request failed (attempt {attempt + 1}), retrying: {e}")
                await asyncio.sleep(base_delay)
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse OpenRouter response: {e}")
                raise

    raise httpx.HTTPError("OpenRouter request exhausted retries")
