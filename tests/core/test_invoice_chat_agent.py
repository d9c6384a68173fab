"""
Tests for the invoice chat agent.

Uses LangChain fake chat models and runnables in place of Gemini.

System role: Verification of chat context assembly and error handling
"""

import asyncio
import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from invoice_extractor.boundary.db.models.chat_history_model import ChatHistoryModel
from invoice_extractor.boundary.db.models.result_model import ResultModel
from invoice_extractor.core.chat.invoice_chat_agent import (
    InvoiceChatAgent,
    format_chat_history,
    format_results_context,
)
from invoice_extractor.core.chat.invoice_chat_prompt import NO_DATA_ANSWER
from invoice_extractor.core.exceptions import ExtractionServiceError


@pytest.fixture
def results():
    return [
        ResultModel(
            doc_name="invoice.pdf",
            page=1,
            original_term="Sub Total",
            canonical="Subtotal",
            value="1000.00",
            confidence=95,
            evidence="Sub Total $1,000.00",
        ),
        ResultModel(
            doc_name="invoice.pdf",
            page=1,
            original_term="GST",
            canonical="GST",
            value="100.00",
            confidence=90,
            evidence="GST $100.00",
        ),
    ]


class TestFormatting:
    def test_results_context_is_json(self, results) -> None:
        context = json.loads(format_results_context(results))

        assert context[0] == {
            "document": "invoice.pdf",
            "page": 1,
            "term": "Sub Total",
            "canonical": "Subtotal",
            "value": "1000.00",
            "evidence": "Sub Total $1,000.00",
        }

    def test_history_is_rendered_oldest_first(self) -> None:
        # Arrange: newest first, as stored
        history = [
            ChatHistoryModel(question="And the tax?", answer="100.00"),
            ChatHistoryModel(question="What is the subtotal?", answer="1000.00"),
        ]

        # Act
        transcript = format_chat_history(history)

        # Assert
        assert transcript.index("What is the subtotal?") < transcript.index("And the tax?")

    def test_history_is_limited(self) -> None:
        history = [ChatHistoryModel(question=f"q{index}", answer=f"a{index}") for index in range(10)]

        transcript = format_chat_history(history)

        assert "q3" in transcript
        assert "q4" not in transcript

    def test_empty_history(self) -> None:
        assert format_chat_history([]) == ""


class TestAnswer:
    """Test suite for InvoiceChatAgent.answer()."""

    @pytest.mark.asyncio
    async def test_no_results_returns_notice_without_model_call(self) -> None:
        def fail(prompt):
            raise AssertionError("model must not be called")

        agent = InvoiceChatAgent(model=RunnableLambda(fail))

        assert await agent.answer("What is the total?", []) == NO_DATA_ANSWER

    @pytest.mark.asyncio
    async def test_answers_from_model(self, results) -> None:
        agent = InvoiceChatAgent(model=FakeListChatModel(responses=["  The subtotal is 1000.00.  "]))

        answer = await agent.answer("What is the subtotal?", results)

        assert answer == "The subtotal is 1000.00."

    @pytest.mark.asyncio
    async def test_prompt_contains_context_history_and_question(self, results) -> None:
        # Arrange
        seen = {}

        def capture(prompt):
            seen["text"] = prompt.to_string()
            return AIMessage(content="ok")

        agent = InvoiceChatAgent(model=RunnableLambda(capture))
        history = [ChatHistoryModel(question="What is the subtotal?", answer="1000.00")]

        # Act
        await agent.answer("And the GST?", results, history)

        # Assert
        assert "And the GST?" in seen["text"]
        assert '"canonical": "Subtotal"' in seen["text"]
        assert "What is the subtotal?" in seen["text"]

    @pytest.mark.asyncio
    async def test_model_failure_is_wrapped(self, results) -> None:
        def boom(prompt):
            raise RuntimeError("quota exceeded")

        agent = InvoiceChatAgent(model=RunnableLambda(boom), model_id="gemini-test")

        with pytest.raises(ExtractionServiceError, match="quota exceeded"):
            await agent.answer("What is the total?", results)

    @pytest.mark.asyncio
    async def test_timeout_is_wrapped(self, results) -> None:
        async def slow(prompt):
            await asyncio.sleep(10)
            return AIMessage(content="late")

        agent = InvoiceChatAgent(model=RunnableLambda(slow), timeout=0.01)

        with pytest.raises(ExtractionServiceError, match="timed out"):
            await agent.answer("What is the total?", results)
