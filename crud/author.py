# crud/author.py
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Author
from schemas import AuthorForm
from typing import List, Optional

async def get_authors(db: AsyncSession) -> List[Author]:
    result = await db.execute(select(Author).order_by(Author.family_name, Author.first_name))
    return result.scalars().all()

async def get_author(db: AsyncSession, author_id: int) -> Optional[Author]:
    return await db.get(Author, author_id)

async def count_authors(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Author))
    return result.scalar_one()

async def create_author(db: AsyncSession, data: AuthorForm) -> Author:
    new_author = Author(**data.model_dump())
    db.add(new_author)
    await db.commit()
    await db.refresh(new_author)
    return new_author
