import asyncio
import logging
import random
from typing import TYPE_CHECKING, Any

import httpx

from sql_review.judge.base import JudgeResponse
from sql_review.judge.exceptions import (
    AuthenticationError,
    JudgeError,
    RateLimitError,
)

if TYPE_CHECKING:
    from sql_review.config import Settings

logger = logging.getLogger(__name__)


class HttpJudge:
    """Judge backed by an OpenAI-compatible chat-completions endpoint."""

    BASE_URL = "https://api.openai.com/v1"
    COMPLETIONS_ENDPOINT = "/chat/completions"
    MAX_RETRIES = 3
    BASE_BACKOFF = 1.0
    MAX_JITTER = 0.5

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        temperature: float = 0.1,
        max_retries: int | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.temperature = temperature
        self.max_retries = self.MAX_RETRIES if max_retries is None else max_retries
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "HttpJudge":
        return cls(
            api_key=settings.judge_api_key,
            model=settings.judge_model,
            base_url=settings.judge_base_url,
            temperature=settings.judge_temperature,
            max_retries=settings.judge_max_retries,
        )

    async def __aenter__(self) -> "HttpJudge":
        self._client = httpx.AsyncClient(timeout=60.0)
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def invoke(
        self,
        prompt: str,
        *,
        timeout_ms: int,
        max_output_tokens: int,
    ) -> JudgeResponse:
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": max_output_tokens,
        }
        data = await self._request(body, timeout=timeout_ms / 1000)
        return JudgeResponse(text=self._extract_text(data))

    async def _request(self, body: dict[str, Any], timeout: float) -> Any:
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        url = f"{self.base_url}{self.COMPLETIONS_ENDPOINT}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        retries = 0
        while True:
            response = await self._client.post(url, json=body, headers=headers, timeout=timeout)

            if response.status_code == 429:
                if retries >= self.max_retries:
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        "Rate limit exceeded after max retries",
                        retry_after=float(retry_after) if retry_after else None,
                    )

                delay = self.BASE_BACKOFF * (2**retries) + random.uniform(0, self.MAX_JITTER)
                logger.warning(
                    "Judge rate limited, retry %d/%d in %.1fs", retries + 1, self.max_retries, delay
                )
                await asyncio.sleep(delay)
                retries += 1
                continue

            if response.status_code == 401:
                raise AuthenticationError("Invalid or expired judge API key")

            response.raise_for_status()
            return response.json()

    @staticmethod
    def _extract_text(data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise JudgeError("Judge response has no completion text") from None
        if not isinstance(content, str):
            raise JudgeError("Judge completion text is not a string")
        return content
