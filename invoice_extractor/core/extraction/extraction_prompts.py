"""
Instruction prompts for invoice extraction.

The text prompt embeds the document text; the vision prompt accompanies the
attached file. Both ask for the same record shape so one parser handles
either response.

Dependencies: None
System role: Prompt definitions for the extractors
"""

RECORD_SHAPE = """{
  "results": [
    {
      "page": 1,
      "term": "CGST",
      "value": "2340.00",
      "evidence": "CGST @ 9%: Rs. 2,340.00",
      "confidence": 97
    }
  ]
}"""

SYSTEM_INSTRUCTIONS = (
    "You read invoices and financial documents and report every labelled monetary "
    "amount. You answer with JSON only."
)

_RULES = """Rules:
- Report every monetary amount together with the label it belongs to: taxes (GST, CGST, SGST, IGST, VAT, cess, TDS, surcharge), subtotals, discounts, totals, net and gross amounts, fees.
- "term" is the label exactly as written in the document, including its spelling and casing.
- "value" is the number only, without currency symbols; keep a leading minus for deductions.
- "evidence" is the short passage the amount was read from.
- "page" is the 1-based page the amount appears on{page_hint}.
- "confidence" is 0-100 and reflects how legible and unambiguous the amount is.
- If nothing qualifies, return {{"results": []}}."""


def build_text_instructions(document_text: str, total_pages: int) -> str:
    """
    Build the user prompt for text-layer extraction.

    Args:
        document_text: Text extracted from the PDF
        total_pages: Page count, used to bound page numbers

    Returns:
        str: Prompt text
    """
    rules = _RULES.format(page_hint=f" (1-{total_pages})")
    return (
        "Extract the financial line items from the invoice text below.\n\n"
        f"{rules}\n\n"
        f"Respond with a JSON object of this shape:\n{RECORD_SHAPE}\n\n"
        f"DOCUMENT TEXT:\n{document_text}"
    )


def build_vision_instructions(filename: str) -> str:
    """
    Build the user prompt for vision extraction of an attached file.

    Args:
        filename: Original filename, given to the model as context

    Returns:
        str: Prompt text
    """
    rules = _RULES.format(page_hint=" (use 1 for single images)")
    return (
        f"The attached file '{filename}' is an invoice that may be scanned, "
        "photographed or handwritten. Read it carefully, including handwriting, "
        "and extract the financial line items.\n\n"
        f"{rules}\n\n"
        f"Respond with a JSON object of this shape:\n{RECORD_SHAPE}"
    )
