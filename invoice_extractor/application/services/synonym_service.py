"""
Synonym service orchestrator.

Manages the user-editable synonym table. Terms are unique after trimming and
lowercasing; adding a term that already exists updates its canonical name
instead of inserting a second row.

Dependencies: sqlalchemy, invoice_extractor.boundary.db
System role: Synonym management orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.synonym_crud import synonym_crud
from invoice_extractor.boundary.db.models.synonym_model import SynonymModel, normalize_term
from invoice_extractor.core.exceptions import (
    DuplicateSynonymError,
    SynonymNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _clean(term: str, canonical: str) -> tuple[str, str]:
    term = (term or "").strip()
    canonical = (canonical or "").strip()
    if not term:
        raise ValidationError("Term is required", field="term")
    if not canonical:
        raise ValidationError("Canonical name is required", field="canonical")
    return term, canonical


class SynonymService:
    """
    Synonym service orchestrator.

    Every mutating method commits its own unit of work.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize synonym service.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    async def list_synonyms(self) -> Sequence[SynonymModel]:
        """List every synonym, newest first."""
        return await synonym_crud.list_all(self.db)

    async def upsert_synonym(self, term: str, canonical: str) -> tuple[SynonymModel, bool]:
        """
        Add a synonym, or update the canonical name of an existing term.

        Args:
            term: Invoice label (case-insensitive)
            canonical: Canonical field name

        Returns:
            tuple: (synonym, created) where created is False when an existing
            term was updated

        Raises:
            ValidationError: Empty term or canonical name
        """
        term, canonical = _clean(term, canonical)

        existing = await synonym_crud.get_by_term(self.db, term)
        if existing is None:
            try:
                synonym = await synonym_crud.create(
                    self.db,
                    term=term,
                    term_normalized=normalize_term(term),
                    canonical=canonical,
                )
                await self.db.commit()
                logger.info(
                    f"{__name__}:upsert_synonym - Created",
                    extra={"synonym_id": str(synonym.id), "term": term, "canonical": canonical},
                )
                return synonym, True
            except IntegrityError:
                # Concurrent insert of the same term won; update that row instead.
                await self.db.rollback()
                existing = await synonym_crud.get_by_term(self.db, term)
                if existing is None:
                    raise

        synonym = await synonym_crud.update_by_id(
            self.db, existing.id, term=term, canonical=canonical
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:upsert_synonym - Updated existing term",
            extra={"synonym_id": str(existing.id), "term": term, "canonical": canonical},
        )
        return synonym, False

    async def update_synonym(self, synonym_id: UUID, term: str, canonical: str) -> SynonymModel:
        """
        Edit a synonym's term and canonical name.

        Args:
            synonym_id: Synonym UUID
            term: New term
            canonical: New canonical name

        Returns:
            SynonymModel: Updated synonym

        Raises:
            ValidationError: Empty term or canonical name
            SynonymNotFoundError: If synonym doesn't exist
            DuplicateSynonymError: If another synonym already uses the term
        """
        term, canonical = _clean(term, canonical)

        if not await synonym_crud.exists(self.db, synonym_id):
            raise SynonymNotFoundError(str(synonym_id))

        clash = await synonym_crud.get_by_term(self.db, term)
        if clash is not None and clash.id != synonym_id:
            raise DuplicateSynonymError(term)

        try:
            synonym = await synonym_crud.update_by_id(
                self.db,
                synonym_id,
                term=term,
                term_normalized=normalize_term(term),
                canonical=canonical,
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateSynonymError(term) from e

        if synonym is None:
            raise SynonymNotFoundError(str(synonym_id))
        return synonym

    async def delete_synonym(self, synonym_id: UUID) -> None:
        """
        Delete a synonym.

        Args:
            synonym_id: Synonym UUID

        Raises:
            SynonymNotFoundError: If synonym doesn't exist
        """
        deleted = await synonym_crud.delete_by_id(self.db, synonym_id)
        if not deleted:
            raise SynonymNotFoundError(str(synonym_id))
        await self.db.commit()
        logger.info(f"{__name__}:delete_synonym - Deleted", extra={"synonym_id": str(synonym_id)})
