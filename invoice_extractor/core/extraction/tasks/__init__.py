"""
Extraction pipeline tasks.

Exports: PdfTextTask, PdfText, GeminiCompletionClient, CompletionClient, Attachment
"""

from .completion_task import Attachment, CompletionClient, GeminiCompletionClient
from .pdf_text_task import PdfText, PdfTextTask

__all__ = [
    "Attachment",
    "CompletionClient",
    "GeminiCompletionClient",
    "PdfText",
    "PdfTextTask",
]
