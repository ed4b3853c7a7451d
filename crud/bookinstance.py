# crud/bookinstance.py
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from models import BookInstance
from schemas import BookInstanceForm
from typing import List, Optional

async def get_book_instances(db: AsyncSession) -> List[BookInstance]:
    stmt = select(BookInstance).options(joinedload(BookInstance.book)).order_by(BookInstance.id)
    result = await db.execute(stmt)
    return result.scalars().all()

async def get_book_instance(db: AsyncSession, instance_id: int) -> Optional[BookInstance]:
    stmt = (
        select(BookInstance)
        .where(BookInstance.id == instance_id)
        .options(joinedload(BookInstance.book))
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()

async def get_instances_of_book(db: AsyncSession, book_id: int) -> List[BookInstance]:
    stmt = select(BookInstance).where(BookInstance.book_id == book_id).order_by(BookInstance.id)
    result = await db.execute(stmt)
    return result.scalars().all()

async def count_book_instances(db: AsyncSession, status: Optional[str] = None) -> int:
    stmt = select(func.count()).select_from(BookInstance)
    if status is not None:
        stmt = stmt.where(BookInstance.status == status)
    result = await db.execute(stmt)
    return result.scalar_one()

async def create_book_instance(db: AsyncSession, data: BookInstanceForm) -> BookInstance:
    new_instance = BookInstance(
        book_id=data.book,
        imprint=data.imprint,
        status=data.status,
        due_back=data.due_back,
    )
    db.add(new_instance)
    await db.commit()
    await db.refresh(new_instance)
    return new_instance
