# models.py
from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from database import Base

BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")

# largest id a SQLite INTEGER column can hold
MAX_ID = 2**63 - 1

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Author(Base):
    __tablename__ = "authors"
    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    family_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    books = relationship("Book", back_populates="author")


class Genre(Base):
    __tablename__ = "genres"
    id = Column(Integer, primary_key=True)
    # uniqueness is checked by the create handler, not by the store
    name = Column(String(100), nullable=False, index=True)

    books = relationship("Book", secondary=book_genres, back_populates="genres")


class Book(Base):
    __tablename__ = "books"
    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False)
    summary = Column(Text, nullable=False)
    isbn = Column(String, nullable=False)

    author = relationship("Author", back_populates="books")
    genres = relationship("Genre", secondary=book_genres, back_populates="books")
    instances = relationship("BookInstance", back_populates="book")


class BookInstance(Base):
    __tablename__ = "book_instances"
    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    imprint = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default="Maintenance", index=True)
    due_back = Column(Date, nullable=True)

    book = relationship("Book", back_populates="instances")
