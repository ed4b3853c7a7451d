# crud/book.py
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, load_only, selectinload

from models import Book, Genre
from schemas import BookForm
from typing import List, Optional

async def get_books(db: AsyncSession) -> List[Book]:
    """Title and author only, sorted by title."""
    stmt = (
        select(Book)
        .options(load_only(Book.id, Book.title, Book.author_id), joinedload(Book.author))
        .order_by(Book.title)
    )
    result = await db.execute(stmt)
    return result.scalars().all()

async def get_book_titles(db: AsyncSession) -> List[Book]:
    result = await db.execute(select(Book).options(load_only(Book.id, Book.title)).order_by(Book.title))
    return result.scalars().all()

async def get_book(db: AsyncSession, book_id: int) -> Optional[Book]:
    stmt = (
        select(Book)
        .where(Book.id == book_id)
        .options(joinedload(Book.author), selectinload(Book.genres))
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()

async def get_books_by_author(db: AsyncSession, author_id: int) -> List[Book]:
    stmt = (
        select(Book)
        .where(Book.author_id == author_id)
        .options(load_only(Book.id, Book.title, Book.summary))
        .order_by(Book.title)
    )
    result = await db.execute(stmt)
    return result.scalars().all()

async def get_books_by_genre(db: AsyncSession, genre_id: int) -> List[Book]:
    stmt = select(Book).where(Book.genres.any(Genre.id == genre_id)).order_by(Book.title)
    result = await db.execute(stmt)
    return result.scalars().all()

async def count_books(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Book))
    return result.scalar_one()

async def _genres(db: AsyncSession, genre_ids: List[int]) -> List[Genre]:
    if not genre_ids:
        return []
    result = await db.execute(select(Genre).where(Genre.id.in_(genre_ids)))
    return list(result.scalars().all())

async def create_book(db: AsyncSession, data: BookForm) -> Book:
    new_book = Book(
        title=data.title,
        author_id=data.author,
        summary=data.summary,
        isbn=data.isbn,
        genres=await _genres(db, data.genre),
    )
    db.add(new_book)
    await db.commit()
    await db.refresh(new_book)
    return new_book

async def update_book(db: AsyncSession, book_id: int, data: BookForm) -> Optional[Book]:
    """Overwrite every field of an existing book, keeping its id."""
    book = await get_book(db, book_id)
    if book is None:
        return None
    book.title = data.title
    book.author_id = data.author
    book.summary = data.summary
    book.isbn = data.isbn
    book.genres = await _genres(db, data.genre)
    await db.commit()
    await db.refresh(book)
    return book
