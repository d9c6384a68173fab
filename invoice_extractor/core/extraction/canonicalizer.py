"""
Term canonicalizer.

Maps the label printed on an invoice to its canonical field name using a
snapshot of the synonym table. Exact (case-insensitive) matches win; a few
ordered heuristics cover common unregistered variants of subtotal, discount
and tax labels; anything else passes through unchanged.

Dependencies: None (pure domain logic)
System role: Canonicalization step of the extraction pipeline
"""

from types import MappingProxyType
from typing import Callable, Iterable, Mapping

SynonymSnapshot = Mapping[str, str]


def normalize_term(term: str) -> str:
    """Lookup key for a term: trimmed and lowercased."""
    return term.strip().lower()


def _is_subtotal(term: str) -> bool:
    return "subtotal" in term or term in ("sub total", "sub-total")


def _is_discount(term: str) -> bool:
    return "discount" in term


def _is_tax(term: str) -> bool:
    return "tax" in term and "gst" not in term


# Most specific first; each rule needs its key in the snapshot to apply
HEURISTICS: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("subtotal", _is_subtotal),
    ("discount", _is_discount),
    ("tax", _is_tax),
)


def build_synonym_snapshot(pairs: Iterable[tuple[str, str]]) -> SynonymSnapshot:
    """
    Build an immutable lookup from (term, canonical) pairs.

    Args:
        pairs: Synonym rows as (term, canonical)

    Returns:
        SynonymSnapshot: Read-only mapping keyed by normalized term
    """
    return MappingProxyType(
        {normalize_term(term): canonical for term, canonical in pairs if term and canonical}
    )


def canonicalize(term: str, synonyms: SynonymSnapshot) -> str:
    """
    Resolve a term to its canonical name.

    Args:
        term: Label as extracted
        synonyms: Snapshot keyed by normalized term

    Returns:
        str: Canonical name, or the term itself when nothing matches
    """
    normalized = normalize_term(term)

    exact = synonyms.get(normalized)
    if exact:
        return exact

    for key, matches in HEURISTICS:
        if matches(normalized):
            canonical = synonyms.get(key)
            if canonical:
                return canonical

    return term
