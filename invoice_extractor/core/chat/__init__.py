"""
Chat over extracted invoice data.

Exports: InvoiceChatAgent
"""

from invoice_extractor.core.chat.invoice_chat_agent import InvoiceChatAgent

__all__ = ["InvoiceChatAgent"]
