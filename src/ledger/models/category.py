"""Category model; categories are created on first use and never deleted."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ledger.models.base import BaseModel


class Category(BaseModel):
    """A transaction category identified by its unique title."""

    __tablename__ = "categories"

    title: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, title={self.title})>"
