"""
Invoice extraction service.

Uploads invoices, extracts financial line items with Gemini, canonicalizes
term labels against a synonym table and answers questions about the results.
"""
