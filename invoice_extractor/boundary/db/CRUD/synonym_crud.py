"""
Synonym CRUD operations.

Lookups go through the normalized (trimmed, lowercased) term so that case
variants resolve to the same row.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.models
System role: Synonym table persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.base_crud import BaseCRUD
from invoice_extractor.boundary.db.models.synonym_model import SynonymModel, normalize_term


class SynonymCRUD(BaseCRUD[SynonymModel]):
    """
    CRUD operations for SynonymModel.

    Extends BaseCRUD with case-insensitive term lookup and ordered listing.
    """

    def __init__(self) -> None:
        """Initialize SynonymCRUD with SynonymModel."""
        super().__init__(SynonymModel)

    async def get_by_term(
        self,
        session: AsyncSession,
        term: str,
    ) -> SynonymModel | None:
        """
        Retrieve the synonym for a term, ignoring case and surrounding space.

        Args:
            session: Async database session
            term: Term to look up

        Returns:
            SynonymModel if found, None otherwise
        """
        stmt = select(SynonymModel).where(
            SynonymModel.term_normalized == normalize_term(term)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, session: AsyncSession) -> Sequence[SynonymModel]:
        """
        Retrieve every synonym, newest first.

        Args:
            session: Async database session

        Returns:
            Sequence of SynonymModels
        """
        stmt = select(SynonymModel).order_by(
            SynonymModel.created_at.desc(), SynonymModel.term_normalized
        )
        result = await session.execute(stmt)
        return result.scalars().all()


synonym_crud = SynonymCRUD()
