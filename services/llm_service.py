# services/llm_service.py
import logging
import time
from functools import lru_cache
from typing import Dict, List, Optional

from openai import APIError, APIStatusError, AsyncOpenAI

from utils.config import Settings, get_settings
from utils.errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMService:
    """
    Client for the OpenAI-compatible chat-completion gateway.
    One request per call: no retries, no streaming.
    """

    def __init__(self, settings: Settings, client=None):
        self.model_name = settings.llm_model
        self.base_url = settings.llm_base_url
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens

        if client is None:
            if not settings.llm_api_key:
                logger.warning("[LLM] LLM_API_KEY is empty, gateway calls will be rejected")
            self.client = AsyncOpenAI(
                api_key=settings.llm_api_key or "missing",
                base_url=self.base_url,
                max_retries=0,
            )
        else:
            self.client = client

        logger.info("[LLM] Service initialized: model=%s base_url=%s", self.model_name, self.base_url)

    async def generate(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Send one chat-completion request and return the first choice's text.

        Args:
            messages: [{"role": "system" | "user" | "assistant", "content": "..."}]
            temperature: Override temperature (optional)
            max_tokens: Override max_tokens (optional)

        Raises:
            UpstreamError: on a non-success status, a transport failure or a
                response without usable content.
        """
        temperature = self.temperature if temperature is None else temperature
        max_tokens = self.max_tokens if max_tokens is None else max_tokens

        total_chars = sum(len(msg.get("content", "")) for msg in messages)
        logger.info(
            "[LLM] Generating with model %s: %d messages, ~%d chars",
            self.model_name,
            len(messages),
            total_chars,
        )

        request_start = time.perf_counter()
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as e:
            body = e.response.text if e.response is not None else str(e.body)
            logger.error("[LLM] AI API error: %s %s", e.status_code, body)
            raise UpstreamError(
                f"AI API error ({e.status_code}): {body}",
                upstream_status=e.status_code,
                body=body,
            ) from e
        except APIError as e:
            logger.error("[LLM] AI API request failed: %s: %s", type(e).__name__, e)
            raise UpstreamError(f"AI API request failed: {e}") from e

        request_time = (time.perf_counter() - request_start) * 1000

        choices = getattr(response, "choices", None)
        if not choices:
            raise UpstreamError("AI API error: response contained no choices")
        content = choices[0].message.content if choices[0].message is not None else None
        if not content:
            raise UpstreamError("AI API error: response contained no message content")

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                "[LLM] Token usage: prompt=%s completion=%s total=%s",
                getattr(usage, "prompt_tokens", "N/A"),
                getattr(usage, "completion_tokens", "N/A"),
                getattr(usage, "total_tokens", "N/A"),
            )
        logger.info("[LLM] Request time: %.2fms, response length: %d chars", request_time, len(content))
        return content


@lru_cache(maxsize=1)
def get_llm_service() -> LLMService:
    """
    FastAPI dependency factory that returns a singleton LLMService instance.
    """
    return LLMService(get_settings())
