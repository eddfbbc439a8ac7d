"""
Card template repository for QSL Card Manager.
"""

from typing import List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.models import CardTemplate
from .base import BaseRepository


class CardTemplateRepository(BaseRepository[CardTemplate]):
    """Repository for card templates, private or shared."""

    def __init__(self, session: AsyncSession):
        """Initialize card template repository with session."""
        super().__init__(session, CardTemplate)

    async def list_for_user(
        self, user_id: int, include_public: bool = False
    ) -> List[CardTemplate]:
        """
        List templates the user can use.

        Args:
            user_id: Owner identifier
            include_public: Also return other users' public templates

        Returns:
            Templates ordered default first, then newest first
        """
        if include_public:
            visible = or_(
                CardTemplate.user_id == user_id, CardTemplate.is_public.is_(True)
            )
        else:
            visible = CardTemplate.user_id == user_id

        stmt = (
            select(CardTemplate)
            .where(visible)
            .order_by(
                CardTemplate.is_default.desc(),
                CardTemplate.created_at.desc(),
                CardTemplate.id.desc(),
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_visible(
        self, template_id: int, user_id: int
    ) -> Optional[CardTemplate]:
        """Get a template owned by the user or shared publicly."""
        stmt = select(CardTemplate).where(
            CardTemplate.id == template_id,
            or_(CardTemplate.user_id == user_id, CardTemplate.is_public.is_(True)),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned(
        self, template_id: int, user_id: int
    ) -> Optional[CardTemplate]:
        """Get a template only if the user owns it."""
        stmt = select(CardTemplate).where(
            CardTemplate.id == template_id, CardTemplate.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_default_for_user(self, user_id: int) -> Optional[CardTemplate]:
        """Get the user's default template, if one is flagged."""
        stmt = (
            select(CardTemplate)
            .where(CardTemplate.user_id == user_id, CardTemplate.is_default.is_(True))
            .order_by(CardTemplate.id.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def clear_default(
        self, user_id: int, except_id: Optional[int] = None
    ) -> None:
        """
        Unset the default flag on the user's templates.

        The caller commits; this only stages the update.
        """
        stmt = (
            update(CardTemplate)
            .where(CardTemplate.user_id == user_id, CardTemplate.is_default.is_(True))
            .values(is_default=False)
        )
        if except_id is not None:
            stmt = stmt.where(CardTemplate.id != except_id)
        await self.session.execute(stmt)
