"""OpenAI chat-completions client used to generate the simulation documents."""
import logging
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from marketsim.config import get_settings
from marketsim.services.llm_exceptions import (
    LLMAPIError,
    LLMAuthenticationError,
    LLMClientError,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
    LLMUnknownError,
)

logger = logging.getLogger(__name__)

# Retry configuration constants
DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 30  # seconds
DEFAULT_EXPONENTIAL_MULTIPLIER = 2


def _should_retry(exc: BaseException) -> bool:
    return isinstance(exc, (LLMRateLimitError, LLMTimeoutError, LLMServiceError))


class OpenAIChatClient:
    """Client for the OpenAI chat-completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: Optional[float] = None,
        request_timeout: Optional[int] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_wait: int = DEFAULT_INITIAL_WAIT,
        max_wait: int = DEFAULT_MAX_WAIT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Default API key; a per-call key overrides it
            model: Chat model name
            base_url: API root, e.g. ``https://api.openai.com/v1``
            temperature: Sampling temperature
            request_timeout: Seconds per HTTP call
            max_retries: Maximum attempts for retryable failures
            initial_wait: Initial wait time in seconds before first retry
            max_wait: Maximum wait time in seconds between retries
            transport: Optional httpx transport (tests inject a mock)
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.request_timeout = request_timeout or settings.llm_request_timeout
        self.max_retries = max_retries
        self.initial_wait = initial_wait
        self.max_wait = max_wait
        self.transport = transport

    def _build_messages(self, prompt: str, system_prompt: Optional[str]) -> List[Dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _raise_for_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        body = response.text[:500]
        if status in (401, 403):
            raise LLMAuthenticationError("Invalid API key")
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            message = "Rate limit exceeded."
            if retry_seconds:
                message += f" Retry after {retry_seconds} seconds."
            raise LLMRateLimitError(message, retry_after=retry_seconds)
        if status >= 500:
            raise LLMServiceError("OpenAI service error", status_code=status, response_body=body)
        raise LLMAPIError(f"OpenAI API error: {status}", status_code=status, response_body=body)

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        for choice in data.get("choices") or []:
            message = choice.get("message") or {}
            content = message.get("content")
            if isinstance(content, str) and content.strip():
                return content
        return ""

    def _post_completion(self, prompt: str, system_prompt: Optional[str], api_key: str) -> str:
        """
        Single HTTP round trip.

        Raises:
            LLMAuthenticationError: 401/403
            LLMRateLimitError: 429
            LLMServiceError: 5xx
            LLMAPIError: other 4xx or a response without text
            LLMTimeoutError: request timed out
            LLMUnknownError: anything unexpected
        """
        payload = {
            "model": self.model,
            "messages": self._build_messages(prompt, system_prompt),
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {api_key}"}
        url = f"{self.base_url}/chat/completions"

        try:
            with httpx.Client(timeout=self.request_timeout, transport=self.transport) as client:
                response = client.post(url, json=payload, headers=headers)
            self._raise_for_status(response)
            data = response.json()
        except httpx.TimeoutException as timeout_exc:
            raise LLMTimeoutError(
                f"OpenAI request timed out after {self.request_timeout}s"
            ) from timeout_exc
        except LLMClientError:
            raise
        except Exception as unexpected_exc:
            raise LLMUnknownError(
                f"Unexpected error during OpenAI call: {unexpected_exc}"
            ) from unexpected_exc

        text = self._extract_text(data)
        if not text:
            raise LLMAPIError("OpenAI returned no text content", status_code=500, response_body=str(data)[:500])
        return text

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> str:
        """
        Generate text for ``prompt``, retrying rate limits, timeouts and 5xx
        responses with exponential backoff.
        """
        key = (api_key or self.api_key or "").strip()
        if not key:
            raise LLMAuthenticationError("OpenAI API key is required")

        @retry(
            retry=retry_if_exception(_should_retry),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(
                multiplier=DEFAULT_EXPONENTIAL_MULTIPLIER,
                min=self.initial_wait,
                max=self.max_wait
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        def _retry_wrapper():
            return self._post_completion(prompt, system_prompt, key)

        try:
            return _retry_wrapper()
        except LLMClientError as exc:
            logger.error("Generation failed (%s): %s", exc.code, exc.message)
            raise


def get_llm_client() -> OpenAIChatClient:
    """Get a client configured from settings."""
    settings = get_settings()

    return OpenAIChatClient(
        max_retries=settings.llm_max_retries,
        initial_wait=settings.llm_initial_wait,
        max_wait=settings.llm_max_wait,
    )
