# routes/books.py
import logging
from functools import partial

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from crud.author import get_authors
from crud.book import create_book, get_book, get_books, update_book
from crud.bookinstance import get_instances_of_book
from crud.genre import get_genres
from database import Database, get_database, get_db
from display import url
from schemas import BookForm, as_list, form_payload, validate_form
from views import RecordId, mark_selected, not_implemented, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")


async def book_payload(request: Request) -> dict:
    payload = form_payload(await request.form())
    # a single checked genre arrives as a bare value
    payload["genre"] = as_list(payload.get("genre"))
    return payload


def candidate(values: dict) -> dict:
    """The submitted book, shaped like a stored one for the form template."""
    return {
        "title": values.get("title"),
        "author_id": values.get("author"),
        "summary": values.get("summary"),
        "isbn": values.get("isbn"),
    }


async def render_book_form(request: Request, database: Database, title: str,
                           book=None, selected_genres=(), errors=None):
    results = await database.parallel(authors=get_authors, genres=get_genres)
    return render(
        request, "book_form.html",
        title=title,
        authors=results["authors"],
        genres=mark_selected(results["genres"], selected_genres),
        book=book,
        errors=errors or [],
    )


@router.get("/books", response_class=HTMLResponse)
async def book_list(request: Request, database: Database = Depends(get_database)):
    async with database.session() as db:
        books = await get_books(db)
    return render(request, "book_list.html", title="Book List", book_list=books)


@router.get("/book/create", response_class=HTMLResponse)
async def book_create_get(request: Request, database: Database = Depends(get_database)):
    return await render_book_form(request, database, "Create Book")


@router.post("/book/create")
async def book_create_post(
    request: Request,
    database: Database = Depends(get_database),
    db: AsyncSession = Depends(get_db),
):
    form = validate_form(BookForm, await book_payload(request))
    if not form.ok:
        return await render_book_form(
            request, database, "Create Book",
            book=candidate(form.values),
            selected_genres=form.values["genre"],
            errors=form.errors,
        )

    book = await create_book(db, form.data)
    logger.info("Created book %s", book.id)
    return RedirectResponse(url(book), status_code=303)


@router.get("/book/{book_id}/delete")
async def book_delete_get(book_id: RecordId):
    return not_implemented("Book", "delete GET")


@router.post("/book/{book_id}/delete")
async def book_delete_post(book_id: RecordId):
    return not_implemented("Book", "delete POST")


@router.get("/book/{book_id}/update", response_class=HTMLResponse)
async def book_update_get(book_id: RecordId, request: Request, database: Database = Depends(get_database)):
    results = await database.parallel(
        book=partial(get_book, book_id=book_id),
        authors=get_authors,
        genres=get_genres,
    )
    book = results["book"]
    if book is None:
        logger.warning("Book %s not found", book_id)
        raise HTTPException(404, "Book not found")

    return render(
        request, "book_form.html",
        title="Update Book",
        authors=results["authors"],
        genres=mark_selected(results["genres"], [g.id for g in book.genres]),
        book=book,
        errors=[],
    )


@router.post("/book/{book_id}/update")
async def book_update_post(
    book_id: RecordId,
    request: Request,
    database: Database = Depends(get_database),
    db: AsyncSession = Depends(get_db),
):
    form = validate_form(BookForm, await book_payload(request))
    if not form.ok:
        return await render_book_form(
            request, database, "Update Book",
            book=candidate(form.values),
            selected_genres=form.values["genre"],
            errors=form.errors,
        )

    book = await update_book(db, book_id, form.data)
    if book is None:
        logger.warning("Book %s not found", book_id)
        raise HTTPException(404, "Book not found")
    logger.info("Updated book %s", book.id)
    return RedirectResponse(url(book), status_code=303)


@router.get("/book/{book_id}", response_class=HTMLResponse)
async def book_detail(book_id: RecordId, request: Request, database: Database = Depends(get_database)):
    results = await database.parallel(
        book=partial(get_book, book_id=book_id),
        book_instances=partial(get_instances_of_book, book_id=book_id),
    )
    if results["book"] is None:
        logger.warning("Book %s not found", book_id)
        raise HTTPException(404, "Book not found")
    return render(
        request, "book_detail.html",
        title="Title",
        book=results["book"],
        book_instances=results["book_instances"],
    )
