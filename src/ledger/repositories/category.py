"""Category repository with title lookups and batch creation."""
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.models.category import Category
from ledger.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def get_all(self) -> list[Category]:
        """Get every category, alphabetically."""
        result = await self.db.execute(select(Category).order_by(Category.title))
        return list(result.scalars().all())

    async def get_by_title(self, title: str) -> Category | None:
        result = await self.db.execute(select(Category).where(Category.title == title))
        return result.scalar_one_or_none()

    async def get_by_titles(self, titles: Iterable[str]) -> list[Category]:
        """Get the existing categories among the given titles in one query."""
        titles = list(set(titles))
        if not titles:
            return []
        result = await self.db.execute(select(Category).where(Category.title.in_(titles)))
        return list(result.scalars().all())

    async def get_or_create(self, title: str) -> tuple[Category, bool]:
        """
        Resolve a category by title, adding it to the session when missing.
        The new row is flushed, not committed; the caller owns the commit.
        Returns (category, created).
        """
        category = await self.get_by_title(title)
        if category is not None:
            return category, False

        category = Category(title=title)
        self.db.add(category)
        await self.db.flush()
        return category, True

    async def create_missing(self, titles: Iterable[str]) -> tuple[dict[str, Category], list[Category]]:
        """
        Resolve every title, creating the missing ones in a single flush.
        Duplicated titles produce one category. Nothing is committed.
        Returns ({title: category}, newly created categories).
        """
        unique_titles = list(dict.fromkeys(titles))
        existing = {category.title: category for category in await self.get_by_titles(unique_titles)}

        created = [Category(title=title) for title in unique_titles if title not in existing]
        if created:
            self.db.add_all(created)
            await self.db.flush()

        by_title = dict(existing)
        by_title.update({category.title: category for category in created})
        return by_title, created
