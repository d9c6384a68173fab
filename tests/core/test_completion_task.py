"""
Tests for the Gemini completion task.

ChatGoogleGenerativeAI is patched out; retries run with the real tenacity
policy but a zero-wait strategy.

System role: Verification of timeout, retry and error wrapping
"""

import asyncio
import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage
from tenacity import wait_none

from invoice_extractor.core.exceptions import ExtractionServiceError
from invoice_extractor.core.extraction.tasks import completion_task
from invoice_extractor.core.extraction.tasks.completion_task import (
    Attachment,
    GeminiCompletionClient,
    is_transient_error,
    message_text,
)


class HttpError(Exception):
    def __init__(self, code: int):
        super().__init__(f"HTTP {code}")
        self.code = code


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    """Retry immediately."""
    monkeypatch.setattr(completion_task, "wait_exponential_jitter", lambda **kwargs: wait_none())


@pytest.fixture
def chat_model():
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content='[{"term": "Total", "value": "5"}]'))
    with patch.object(completion_task, "ChatGoogleGenerativeAI", return_value=model) as factory:
        model.factory = factory
        yield model


class TestIsTransientError:
    @pytest.mark.parametrize("exc", [asyncio.TimeoutError(), ConnectionError(), HttpError(429), HttpError(503)])
    def test_transient(self, exc) -> None:
        assert is_transient_error(exc)

    @pytest.mark.parametrize("exc", [ValueError("bad prompt"), HttpError(400), HttpError(403)])
    def test_permanent(self, exc) -> None:
        assert not is_transient_error(exc)


class TestAttachment:
    def test_image_becomes_data_uri(self) -> None:
        block = Attachment(data=b"img", mime_type="image/png").to_content_block()
        assert block["type"] == "image_url"
        assert block["image_url"]["url"] == "data:image/png;base64," + base64.b64encode(b"img").decode()

    def test_pdf_becomes_media_block(self) -> None:
        block = Attachment(data=b"%PDF", mime_type="application/pdf").to_content_block()
        assert block == {
            "type": "media",
            "mime_type": "application/pdf",
            "data": base64.b64encode(b"%PDF").decode(),
        }


class TestMessageText:
    def test_string_content(self) -> None:
        assert message_text(AIMessage(content="hello")) == "hello"

    def test_list_content_keeps_text_parts(self) -> None:
        message = AIMessage(content=[{"type": "text", "text": "[1"}, "]", {"type": "image_url"}])
        assert message_text(message) == "[1]"


class TestGeminiCompletionClient:
    """Test suite for GeminiCompletionClient.complete()."""

    @pytest.mark.asyncio
    async def test_returns_completion_text_in_json_mode(self, chat_model) -> None:
        # Arrange
        client = GeminiCompletionClient("gemini-test", api_key="key", timeout=5, max_attempts=3)

        # Act
        text = await client.complete("system", "user", temperature=0.1, max_tokens=2000)

        # Assert
        assert text == '[{"term": "Total", "value": "5"}]'
        kwargs = chat_model.factory.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["max_output_tokens"] == 2000
        assert kwargs["response_mime_type"] == "application/json"
        assert kwargs["google_api_key"] == "key"

    @pytest.mark.asyncio
    async def test_attachment_is_sent_with_prompt(self, chat_model) -> None:
        client = GeminiCompletionClient("gemini-test")

        await client.complete(
            "system",
            "user",
            temperature=0.1,
            max_tokens=100,
            attachment=Attachment(data=b"img", mime_type="image/jpeg"),
        )

        messages = chat_model.ainvoke.await_args.args[0]
        assert messages[1].content[0] == {"type": "text", "text": "user"}
        assert messages[1].content[1]["type"] == "image_url"

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, chat_model) -> None:
        # Arrange
        chat_model.ainvoke.side_effect = [HttpError(503), AIMessage(content="[]")]
        client = GeminiCompletionClient("gemini-test", max_attempts=3)

        # Act
        text = await client.complete("system", "user", temperature=0.1, max_tokens=100)

        # Assert
        assert text == "[]"
        assert chat_model.ainvoke.await_count == 2

    @pytest.mark.asyncio
    async def test_permanent_failure_is_not_retried(self, chat_model) -> None:
        chat_model.ainvoke.side_effect = HttpError(400)
        client = GeminiCompletionClient("gemini-test", max_attempts=3)

        with pytest.raises(ExtractionServiceError) as exc_info:
            await client.complete("system", "user", temperature=0.1, max_tokens=100)

        assert chat_model.ainvoke.await_count == 1
        assert exc_info.value.details["model"] == "gemini-test"

    @pytest.mark.asyncio
    async def test_timeout_exhausts_attempts(self, chat_model) -> None:
        # Arrange
        async def hang(messages):
            await asyncio.sleep(10)

        chat_model.ainvoke.side_effect = hang
        client = GeminiCompletionClient("gemini-test", timeout=0.01, max_attempts=2)

        # Act / Assert
        with pytest.raises(ExtractionServiceError, match="timed out"):
            await client.complete("system", "user", temperature=0.1, max_tokens=100)
        assert chat_model.ainvoke.await_count == 2
