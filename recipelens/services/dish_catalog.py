"""Read-only lookup of known dishes (name, cuisine, keywords) in a SQL table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import Integer, String, Text, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from recipelens.config import settings
from recipelens.utils.exceptions import CatalogError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase): ...


class KnownDishRow(Base):
    __tablename__ = "known_dishes"
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    cuisine: Mapped[str | None] = mapped_column(String(80))
    keywords: Mapped[str | None] = mapped_column(Text)  # comma-separated


@dataclass(frozen=True)
class KnownDish:
    name: str
    cuisine: Optional[str] = None
    keywords: Tuple[str, ...] = ()


def split_keywords(raw: Optional[str]) -> Tuple[str, ...]:
    return tuple(k.strip().lower() for k in (raw or "").split(",") if k.strip())


class DishCatalog:
    """Known dish reference data, loaded once and kept in memory."""

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None) -> None:
        if engine is None and database_url:
            engine = create_engine(database_url, future=True)
        self._engine = engine
        self._dishes: Optional[List[KnownDish]] = None

    @property
    def enabled(self) -> bool:
        return self._engine is not None

    def load(self) -> List[KnownDish]:
        """
        Return every known dish.

        Raises:
            CatalogError: If the table cannot be read
        """
        if self._engine is None:
            return []
        if self._dishes is not None:
            return self._dishes

        try:
            with Session(self._engine) as db:
                rows = db.execute(select(KnownDishRow).order_by(KnownDishRow.id)).scalars().all()
        except SQLAlchemyError as e:
            raise CatalogError(f"Failed to read known dishes: {e}") from e

        self._dishes = [
            KnownDish(name=row.name, cuisine=row.cuisine or None, keywords=split_keywords(row.keywords))
            for row in rows
            if row.name
        ]
        logger.info("Loaded known dish table", extra={"dish_count": len(self._dishes)})
        return self._dishes


def seed_known_dishes(engine: Engine, dishes: Iterable[KnownDish]) -> int:
    """Create the table if needed and insert the given dishes. Returns rows written."""
    Base.metadata.create_all(engine)
    count = 0
    with Session(engine) as db:
        for dish in dishes:
            db.add(KnownDishRow(name=dish.name, cuisine=dish.cuisine, keywords=",".join(dish.keywords)))
            count += 1
        db.commit()
    return count


def get_default_catalog() -> DishCatalog:
    """Catalog for the configured database URL (disabled when unset)."""
    return DishCatalog(database_url=settings.dish_database_url)
