# display.py — derived values shown in views, computed from stored records
from datetime import date
from functools import singledispatch
from typing import Optional

from markupsafe import Markup

from models import Author, Book, BookInstance, Genre


@singledispatch
def url(entity) -> str:
    raise TypeError(f"No canonical URL for {type(entity).__name__}")


@url.register
def _(entity: Book) -> str:
    return f"/catalog/book/{entity.id}"


@url.register
def _(entity: Author) -> str:
    return f"/catalog/author/{entity.id}"


@url.register
def _(entity: Genre) -> str:
    return f"/catalog/genre/{entity.id}"


@url.register
def _(entity: BookInstance) -> str:
    return f"/catalog/bookinstance/{entity.id}"


def ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_date(value: Optional[date], comma: bool = False) -> str:
    """June 6th 1944, or June 6th, 1944 with ``comma``."""
    if value is None:
        return ""
    sep = ", " if comma else " "
    return f"{value.strftime('%B')} {ordinal(value.day)}{sep}{value.year}"


def author_name(author: Author) -> str:
    return f"{author.family_name}, {author.first_name}"


def date_of_birth_formatted(author: Author) -> str:
    return format_date(author.date_of_birth) if author.date_of_birth else "Unknown"


def date_of_death_formatted(author: Author) -> str:
    return format_date(author.date_of_death) if author.date_of_death else "Present"


def lifespan(author: Author) -> str:
    return f"{date_of_birth_formatted(author)} - {date_of_death_formatted(author)}"


def due_back_formatted(instance: BookInstance) -> str:
    return format_date(instance.due_back, comma=True)


def stored(value) -> Markup:
    """Text is escaped when it is saved, so it is rendered without escaping again."""
    return Markup("" if value is None else value)


FILTERS = {
    "url": url,
    "author_name": author_name,
    "format_date": format_date,
    "date_of_birth_formatted": date_of_birth_formatted,
    "date_of_death_formatted": date_of_death_formatted,
    "lifespan": lifespan,
    "due_back_formatted": due_back_formatted,
    "stored": stored,
}
