# populate_db.py – one-time script to seed the catalog with sample records
import asyncio
import sys

from config import settings
from crud.author import create_author
from crud.book import create_book
from crud.bookinstance import create_book_instance
from crud.genre import add_or_find_genre
from database import Database
from schemas import AuthorForm, BookForm, BookInstanceForm, GenreForm, validate_form

AUTHORS = [
    {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": "1973-06-06"},
    {"first_name": "Ben", "family_name": "Bova", "date_of_birth": "1932-11-08"},
    {"first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "1920-01-02", "date_of_death": "1992-04-06"},
    {"first_name": "Bob", "family_name": "Billings"},
    {"first_name": "Jim", "family_name": "Jones", "date_of_birth": "1971-12-16"},
]

GENRES = ["Fantasy", "Science Fiction", "French Poetry"]

# (title, author index, genre indexes)
BOOKS = [
    ("The Name of the Wind (The Kingkiller Chronicle, #1)", 0, [0]),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", 0, [0]),
    ("The Slow Regard of Silent Things (Kingkiller Chronicle)", 0, [0]),
    ("Apes and Angels", 1, [1]),
    ("Death Wave", 1, [1]),
    ("Test Book 1", 4, [0, 1]),
    ("Test Book 2", 4, []),
]

# (book index, imprint, status, due_back)
INSTANCES = [
    (0, "London Gollancz, 2014.", "Available", None),
    (1, "Gollancz, 2011.", "Loaned", None),
    (2, "Gollancz, 2015.", None, None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Maintenance", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Loaned", None),
    (0, "Imprint XXX2", None, None),
    (1, "Imprint XXX3", None, None),
]


def payload(schema, **fields):
    """Seed records go through the same sanitizing as submitted forms."""
    form = validate_form(schema, fields)
    if not form.ok:
        raise ValueError(f"Bad seed record {fields}: {form.errors}")
    return form.data


async def populate(url: str):
    database = Database(url)
    await database.init()
    try:
        async with database.session() as db:
            authors = []
            for fields in AUTHORS:
                author = await create_author(db, payload(AuthorForm, **fields))
                authors.append(author)
                print(f"Added author {author.family_name}, {author.first_name}")

            genres = []
            for name in GENRES:
                genre, created = await add_or_find_genre(db, payload(GenreForm, name=name))
                genres.append(genre)
                print(f"{'Added' if created else 'Found'} genre {genre.name}")

            books = []
            for title, author_index, genre_indexes in BOOKS:
                book = await create_book(db, payload(BookForm,
                    title=title,
                    author=authors[author_index].id,
                    summary=f"Summary of {title}",
                    isbn=f"97807564{len(books):05d}",
                    genre=[genres[i].id for i in genre_indexes],
                ))
                books.append(book)
                print(f"Added book {book.title}")

            for book_index, imprint, status, due_back in INSTANCES:
                instance = await create_book_instance(db, payload(BookInstanceForm,
                    book=books[book_index].id,
                    imprint=imprint,
                    status=status or "Maintenance",
                    due_back=due_back,
                ))
                print(f"Added copy {instance.id} ({instance.status}) of {books[book_index].title}")
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(populate(sys.argv[1] if len(sys.argv) > 1 else settings.database_url))
    print("Population complete!")
