from typing import Any, Dict, Optional
import httpx

from config import settings, logger
from config.constants import LLM_CONFIG
from exceptions import (
    LLMException,
    UpstreamRateLimitedException,
    UpstreamUnavailableException,
    UpstreamUnreachableException,
)
from utils.circuit_breaker import CircuitBreaker
from utils.retry import call_with_retry


class InferenceClient:
    """
    Thin client for an OpenAI-style chat-completion endpoint.

    Returns the raw assistant text; callers parse it. Every failure surfaces
    as an LLMException subclass:
      - 429 from the provider      -> UpstreamRateLimitedException
      - 402, 5xx, other non-2xx    -> UpstreamUnavailableException
      - connection errors/timeouts -> UpstreamUnreachableException
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = LLM_CONFIG.REQUEST_TIMEOUT,
        breaker: Optional[CircuitBreaker] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.AI_GATEWAY_API_KEY
        self.endpoint = endpoint or settings.AI_GATEWAY_URL
        self.model = model or settings.AI_MODEL
        self.timeout = timeout
        self.breaker = breaker or CircuitBreaker(
            failure_threshold=LLM_CONFIG.CIRCUIT_FAILURE_THRESHOLD,
            recovery_timeout=LLM_CONFIG.CIRCUIT_RECOVERY_TIMEOUT,
            tracked_exceptions=(UpstreamUnavailableException, UpstreamUnreachableException),
            name="inference_provider",
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def infer(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = LLM_CONFIG.TEXT_TEMPERATURE,
        max_tokens: Optional[int] = None,
        retry: bool = False,
    ) -> str:
        """Send one system+user exchange and return the assistant's text.

        With retry=True, only connection failures (request never reached the
        provider) are retried. HTTP errors are never retried.
        """
        if not self.is_configured:
            logger.critical("AI_GATEWAY_API_KEY not configured.")
            raise UpstreamUnavailableException("API key not configured")

        body: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }
        if max_tokens:
            body["max_tokens"] = max_tokens

        attempts = LLM_CONFIG.CONNECT_RETRY_ATTEMPTS if retry else 1
        data = await self.breaker.call(self._send, body, attempts)
        return self._extract_text(data)

    async def _send(self, body: Dict[str, Any], attempts: int) -> Dict[str, Any]:
        try:
            return await call_with_retry(
                self._post,
                body,
                max_attempts=attempts,
                exceptions=(httpx.ConnectError,),
            )
        except httpx.ConnectError as e:
            logger.error("Inference provider unreachable: %s", str(e))
            raise UpstreamUnreachableException(f"Connection failed: {type(e).__name__}")

    async def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=headers, json=body)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Inference provider HTTP error %s: %s", status, e.response.text[:500])
            if status == 429:
                raise UpstreamRateLimitedException(f"HTTP {status}")
            raise UpstreamUnavailableException(f"HTTP {status}")
        except httpx.ConnectError:
            # retried by _send
            raise
        except httpx.RequestError as e:
            logger.error("Inference provider request error: %s", str(e))
            raise UpstreamUnreachableException(f"Request failed: {type(e).__name__}")
        except ValueError as e:
            logger.error("Inference provider returned a non-JSON body: %s", e)
            raise UpstreamUnavailableException("Malformed response body")

    def _extract_text(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.error("Unexpected chat-completion envelope: %s", str(data)[:500])
            raise UpstreamUnavailableException("Malformed completion envelope")
        if not isinstance(content, str):
            raise UpstreamUnavailableException("Completion has no text content")
        return content


async def infer_safely(client: InferenceClient, system_prompt: str, user_prompt: str, **kwargs) -> Optional[str]:
    """Best-effort variant: returns None instead of raising on upstream failure."""
    if not client.is_configured:
        return None
    try:
        return await client.infer(system_prompt, user_prompt, **kwargs)
    except LLMException as e:
        logger.warning("Optional AI review skipped: %s", e.details.get("reason", e.message))
        return None
