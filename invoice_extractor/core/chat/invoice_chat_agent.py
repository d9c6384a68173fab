"""
Invoice chat agent.

Answers natural-language questions about a job's extracted results with a
Gemini chat model. The full result set is passed as JSON context; recent
exchanges are passed as conversation history.

Dependencies: langchain_google_genai, langchain_core
System role: Q&A over extracted invoice data
"""

import asyncio
import json
import logging
from typing import Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_google_genai import ChatGoogleGenerativeAI

from invoice_extractor.boundary.db.models.chat_history_model import ChatHistoryModel
from invoice_extractor.boundary.db.models.result_model import ResultModel
from invoice_extractor.core.chat.invoice_chat_prompt import INVOICE_CHAT_PROMPT, NO_DATA_ANSWER
from invoice_extractor.core.exceptions import ExtractionServiceError

logger = logging.getLogger(__name__)

MAX_CONVERSATION_HISTORY = 4


def format_results_context(results: Sequence[ResultModel]) -> str:
    """Serialize results into the JSON context block."""
    return json.dumps(
        [
            {
                "document": result.doc_name,
                "page": result.page,
                "term": result.original_term,
                "canonical": result.canonical,
                "value": result.value,
                "evidence": result.evidence,
            }
            for result in results
        ],
        indent=2,
    )


def format_chat_history(history: Sequence[ChatHistoryModel]) -> str:
    """
    Render the most recent exchanges oldest first.

    Args:
        history: Exchanges, newest first

    Returns:
        str: Transcript, empty when there is no history
    """
    recent = list(history[:MAX_CONVERSATION_HISTORY])
    if not recent:
        return ""
    lines = ["Previous conversation:"]
    for exchange in reversed(recent):
        lines.append(f"User: {exchange.question}")
        lines.append(f"Assistant: {exchange.answer}")
    return "\n".join(lines)


class InvoiceChatAgent:
    """
    Q&A agent over extracted invoice data.

    Uses a prompt | model | parser chain so the model can be swapped in tests.
    """

    def __init__(
        self,
        model: BaseChatModel | None = None,
        model_id: str = "gemini-2.0-flash",
        temperature: float = 0.3,
        max_tokens: int = 500,
        timeout: float = 120.0,
        api_key: str | None = None,
    ) -> None:
        """
        Initialize chat agent.

        Args:
            model: Chat model to use (defaults to ChatGoogleGenerativeAI)
            model_id: Gemini model identifier
            temperature: Model temperature
            max_tokens: Answer token limit
            timeout: Per-question timeout in seconds
            api_key: Google API key (None reads GOOGLE_API_KEY)
        """
        if model is None:
            kwargs = {
                "model": model_id,
                "temperature": temperature,
                "max_output_tokens": max_tokens,
            }
            if api_key:
                kwargs["google_api_key"] = api_key
            model = ChatGoogleGenerativeAI(**kwargs)

        self._model_id = model_id
        self._timeout = timeout
        self._chain = INVOICE_CHAT_PROMPT | model | StrOutputParser()

    async def answer(
        self,
        question: str,
        results: Sequence[ResultModel],
        history: Sequence[ChatHistoryModel] = (),
    ) -> str:
        """
        Answer a question about extracted results.

        Args:
            question: User question
            results: The job's persisted results
            history: Previous exchanges for the job, newest first

        Returns:
            str: Answer text; a fixed notice when there are no results

        Raises:
            ExtractionServiceError: When the model call fails or times out
        """
        if not results:
            return NO_DATA_ANSWER

        logger.info(
            f"{__name__}:answer - START",
            extra={"result_count": len(results), "history_count": len(history)},
        )
        try:
            answer = await asyncio.wait_for(
                self._chain.ainvoke({
                    "question": question,
                    "context": format_results_context(results),
                    "chat_history": format_chat_history(history),
                }),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise ExtractionServiceError(
                f"Chat answer timed out after {self._timeout:.0f}s", model=self._model_id
            ) from e
        except Exception as e:
            raise ExtractionServiceError(
                f"Chat request failed: {type(e).__name__}: {e}", model=self._model_id
            ) from e

        return answer.strip() or "I could not generate an answer."
