"""
PDF text extraction task using LangChain PyPDFLoader.

Reads the text layer of an uploaded PDF. A PDF without a text layer (a scan)
raises NoTextFoundError so the caller can point the user at the vision path.

Dependencies: langchain_community.document_loaders, pypdf
System role: First stage of the text extraction path
"""

import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader
from pydantic import BaseModel

from invoice_extractor.core.exceptions import NoTextFoundError, ParsingError


class PdfText(BaseModel):
    """Text layer of a PDF."""

    text: str
    page_count: int


class PdfTextTask:
    """Extract the text layer from PDF bytes."""

    def extract(self, content: bytes, filename: str = "document.pdf") -> PdfText:
        """
        Extract text from a PDF.

        PyPDFLoader reads from a path, so the bytes are spooled to a
        temporary file that is removed afterwards.

        Args:
            content: PDF bytes
            filename: Original filename, for error context

        Returns:
            PdfText: Joined page text and page count

        Raises:
            ParsingError: When the PDF cannot be read
            NoTextFoundError: When the PDF has no extractable text
        """
        if not content:
            raise ParsingError("Empty PDF upload", document_name=filename, file_type="pdf")

        fd, path = tempfile.mkstemp(prefix="invoice_", suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)

            try:
                pages = PyPDFLoader(path).load()
            except Exception as e:
                raise ParsingError(
                    f"Failed to parse PDF: {e}", document_name=filename, file_type="pdf"
                ) from e
        finally:
            os.remove(path)

        text = "\n\n".join(page.page_content.strip() for page in pages).strip()
        if not text:
            raise NoTextFoundError(document_name=filename)

        return PdfText(text=text, page_count=max(len(pages), 1))
