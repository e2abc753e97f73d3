"""LLM client for OpenAI-compatible chat completion and image APIs."""
import asyncio
import httpx
from typing import Any, Optional
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = {408, 409, 429, 500, 502, 503, 504}


class LLMError(Exception):
    """Upstream LLM call failed (transport, HTTP status, or envelope)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class LLMTimeoutError(LLMError, TimeoutError):
    """The LLM endpoint did not answer within the configured timeout."""

    def __init__(self, message: str):
        super().__init__(message, retryable=True)


class LLMClient:
    """Wrapper for an OpenAI-compatible API with explicit timeout and retry policy."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        model: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff_s: Optional[float] = None,
    ):
        self.endpoint = (endpoint or settings.LLM_ENDPOINT).rstrip("/")
        self.model = model or settings.LLM_MODEL
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.timeout_s = timeout_s or settings.LLM_DEFAULT_TIMEOUT
        self.max_retries = settings.LLM_MAX_RETRIES if max_retries is None else max_retries
        self.retry_backoff_s = (
            settings.LLM_RETRY_BACKOFF_S if retry_backoff_s is None else retry_backoff_s
        )

        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        self.client = httpx.AsyncClient(timeout=self.timeout_s, headers=headers)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        timeout_s: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Run a chat completion and return the first choice's text."""
        payload = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
        }
        result = await self._post("/v1/chat/completions", payload, timeout_s)

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise LLMError("LLM response has no choices[0].message.content")
        if content is None:
            raise LLMError("LLM response has no choices[0].message.content")
        return content

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        timeout_s: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Generate text completion."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return await self.chat(
            messages, temperature=temperature, timeout_s=timeout_s, model=model
        )

    async def generate_image(
        self,
        prompt: str,
        size: str = "1024x1024",
        n: int = 1,
        timeout_s: Optional[float] = None,
    ) -> list[str]:
        """Generate images and return their URLs."""
        payload = {
            "model": settings.LLM_IMAGE_MODEL,
            "prompt": prompt,
            "n": n,
            "size": size,
        }
        result = await self._post("/v1/images/generations", payload, timeout_s)
        try:
            return [img["url"] for img in result["data"]]
        except (KeyError, TypeError):
            raise LLMError("Image response has no data[].url")

    async def _post(
        self,
        path: str,
        payload: dict[str, Any],
        timeout_s: Optional[float],
    ) -> dict:
        effective_timeout = timeout_s or self.timeout_s
        attempt = 0

        while True:
            try:
                return await self._post_once(path, payload, effective_timeout)
            except LLMError as e:
                if not e.retryable or attempt >= self.max_retries:
                    raise
                delay = self.retry_backoff_s * (2 ** attempt)
                attempt += 1
                logger.warning(
                    f"LLM call to {path} failed ({e}); retry {attempt}/{self.max_retries} in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

    async def _post_once(
        self,
        path: str,
        payload: dict[str, Any],
        timeout_s: float,
    ) -> dict:
        try:
            response = await self.client.post(
                f"{self.endpoint}{path}",
                json=payload,
                timeout=timeout_s,
            )
        except httpx.TimeoutException:
            logger.error(f"LLM request timed out after {timeout_s}s")
            raise LLMTimeoutError(f"LLM request timed out after {timeout_s}s")
        except httpx.TransportError as e:
            logger.error(f"LLM transport error: {e}")
            raise LLMError(f"LLM endpoint unreachable: {e}", retryable=True) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            detail = _error_message(body) or response.text[:200]
            logger.error(f"LLM endpoint returned {response.status_code}: {detail}")
            raise LLMError(
                f"LLM endpoint returned {response.status_code}: {detail}",
                status_code=response.status_code,
                retryable=response.status_code in _RETRYABLE_STATUS,
            )

        if not isinstance(body, dict):
            raise LLMError("LLM endpoint returned a non-JSON body", status_code=response.status_code)

        if body.get("error"):
            raise LLMError(
                _error_message(body) or "LLM endpoint reported an error",
                status_code=response.status_code,
            )

        return body

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()


def _error_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return None
