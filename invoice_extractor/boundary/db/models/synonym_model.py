"""
Synonym ORM model.

Maps an invoice label to its canonical field name. term_normalized carries a
unique constraint so case variants of one term can never coexist.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.base
System role: User-editable canonicalization table
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from invoice_extractor.boundary.db.base import Base, TimestampMixin, UUIDMixin
from invoice_extractor.core.extraction.canonicalizer import normalize_term

__all__ = ["SynonymModel", "normalize_term"]


class SynonymModel(Base, UUIDMixin, TimestampMixin):
    """
    Synonym ORM model.

    Attributes:
        term: Term as entered (trimmed)
        term_normalized: Lowercased term, unique
        canonical: Canonical field name the term maps to
    """

    __tablename__ = "synonyms"

    term: Mapped[str] = mapped_column(String(255), nullable=False)

    term_normalized: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    canonical: Mapped[str] = mapped_column(String(255), nullable=False)
