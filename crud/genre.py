# crud/genre.py
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Genre
from schemas import GenreForm
from typing import List, Optional

async def get_genres(db: AsyncSession) -> List[Genre]:
    result = await db.execute(select(Genre).order_by(Genre.name))
    return result.scalars().all()

async def get_genre(db: AsyncSession, genre_id: int) -> Optional[Genre]:
    return await db.get(Genre, genre_id)

async def find_genre_by_name(db: AsyncSession, name: str) -> Optional[Genre]:
    result = await db.execute(select(Genre).where(Genre.name == name).limit(1))
    return result.scalar_one_or_none()

async def count_genres(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Genre))
    return result.scalar_one()

async def create_genre(db: AsyncSession, data: GenreForm) -> Genre:
    new_genre = Genre(name=data.name)
    db.add(new_genre)
    await db.commit()
    await db.refresh(new_genre)
    return new_genre

async def add_or_find_genre(db: AsyncSession, data: GenreForm):
    """Return (genre, created); an existing genre with the same name wins."""
    existing = await find_genre_by_name(db, data.name)
    if existing:
        return existing, False
    return await create_genre(db, data), True
