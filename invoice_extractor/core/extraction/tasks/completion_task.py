"""
Completion task for the Gemini chat models.

Wraps ChatGoogleGenerativeAI behind a small async interface used by the
extractors and the chat agent: instructions + content (+ optional file
attachment) in, text out. Every call has an explicit timeout. Transport
failures (timeouts, connection errors, 429/5xx) are retried with exponential
jitter; other failures are raised immediately.

Dependencies: langchain_google_genai, langchain_core, tenacity
System role: Completion service adapter
"""

import asyncio
import base64
import logging
from typing import Protocol

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from invoice_extractor.core.exceptions import ExtractionServiceError

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class Attachment(BaseModel):
    """Binary file sent alongside the prompt."""

    data: bytes = Field(repr=False)
    mime_type: str

    def to_content_block(self) -> dict:
        encoded = base64.b64encode(self.data).decode("utf-8")
        if self.mime_type.startswith("image/"):
            return {
                "type": "image_url",
                "image_url": {"url": f"data:{self.mime_type};base64,{encoded}"},
            }
        return {"type": "media", "mime_type": self.mime_type, "data": encoded}


class CompletionClient(Protocol):
    """Anything that turns a prompt into completion text."""

    async def complete(
        self,
        instructions: str,
        content: str,
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = True,
        attachment: Attachment | None = None,
    ) -> str: ...


def _status_code(exc: BaseException) -> int | None:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def is_transient_error(exc: BaseException) -> bool:
    """
    Whether a completion failure is worth retrying.

    Args:
        exc: Raised exception

    Returns:
        bool: True for timeouts, connection errors and 408/429/5xx responses
    """
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
        return True
    return _status_code(exc) in TRANSIENT_STATUS_CODES


def message_text(message: BaseMessage) -> str:
    """Flatten message content (str or list of parts) to text."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiCompletionClient:
    """CompletionClient backed by Google Gemini through LangChain."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout: float = 120.0,
        max_attempts: int = 3,
    ) -> None:
        """
        Initialize the client.

        Args:
            model: Gemini model id
            api_key: Google API key (None reads GOOGLE_API_KEY)
            timeout: Per-attempt timeout in seconds
            max_attempts: Attempts for transient failures
        """
        self._model = model
        self._api_key = api_key
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._chat_models: dict[tuple[float, int, bool], ChatGoogleGenerativeAI] = {}

    @property
    def model(self) -> str:
        return self._model

    def _chat_model(self, temperature: float, max_tokens: int, json_mode: bool) -> ChatGoogleGenerativeAI:
        key = (temperature, max_tokens, json_mode)
        if key not in self._chat_models:
            kwargs = {
                "model": self._model,
                "temperature": temperature,
                "max_output_tokens": max_tokens,
                "max_retries": 1,
            }
            if self._api_key:
                kwargs["google_api_key"] = self._api_key
            if json_mode:
                kwargs["response_mime_type"] = "application/json"
            self._chat_models[key] = ChatGoogleGenerativeAI(**kwargs)
        return self._chat_models[key]

    def _log_retry(self, retry_state) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{__name__}:complete - Retry {retry_state.attempt_number}/{self._max_attempts}",
            extra={"model": self._model, "error_type": type(exc).__name__ if exc else None},
        )

    async def complete(
        self,
        instructions: str,
        content: str,
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = True,
        attachment: Attachment | None = None,
    ) -> str:
        """
        Run one completion.

        Args:
            instructions: System instructions
            content: User prompt text
            temperature: Sampling temperature
            max_tokens: Output token limit
            json_mode: Ask the model for a JSON response body
            attachment: Optional file sent with the prompt

        Returns:
            str: Completion text

        Raises:
            ExtractionServiceError: When the call fails or retries are exhausted
        """
        human_content: str | list = content
        if attachment is not None:
            human_content = [{"type": "text", "text": content}, attachment.to_content_block()]
        messages = [SystemMessage(content=instructions), HumanMessage(content=human_content)]
        chat_model = self._chat_model(temperature, max_tokens, json_mode)

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception(is_transient_error),
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
                before_sleep=self._log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await asyncio.wait_for(
                        chat_model.ainvoke(messages), timeout=self._timeout
                    )
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise ExtractionServiceError(
                f"Completion timed out after {self._timeout:.0f}s", model=self._model
            ) from e
        except RetryError as e:
            raise ExtractionServiceError("Completion retries exhausted", model=self._model) from e
        except Exception as e:
            raise ExtractionServiceError(
                f"Completion request failed: {type(e).__name__}: {e}", model=self._model
            ) from e

        return message_text(response)
