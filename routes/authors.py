# routes/authors.py
import logging
from functools import partial

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from crud.author import create_author, get_author, get_authors
from crud.book import get_books_by_author
from database import Database, get_database, get_db
from display import url
from schemas import AuthorForm, form_payload, validate_form
from views import RecordId, not_implemented, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")


@router.get("/authors", response_class=HTMLResponse)
async def author_list(request: Request, database: Database = Depends(get_database)):
    async with database.session() as db:
        authors = await get_authors(db)
    return render(request, "author_list.html", title="Author List", author_list=authors)


@router.get("/author/create", response_class=HTMLResponse)
async def author_create_get(request: Request):
    return render(request, "author_form.html", title="Create Author", author=None, errors=[])


@router.post("/author/create")
async def author_create_post(request: Request, db: AsyncSession = Depends(get_db)):
    form = validate_form(AuthorForm, form_payload(await request.form()))
    if not form.ok:
        return render(request, "author_form.html", title="Create Author",
                      author=form.values, errors=form.errors)

    author = await create_author(db, form.data)
    logger.info("Created author %s", author.id)
    return RedirectResponse(url(author), status_code=303)


@router.get("/author/{author_id}/delete")
async def author_delete_get(author_id: RecordId):
    return not_implemented("Author", "delete GET")


@router.post("/author/{author_id}/delete")
async def author_delete_post(author_id: RecordId):
    return not_implemented("Author", "delete POST")


@router.get("/author/{author_id}/update")
async def author_update_get(author_id: RecordId):
    return not_implemented("Author", "update GET")


@router.post("/author/{author_id}/update")
async def author_update_post(author_id: RecordId):
    return not_implemented("Author", "update POST")


@router.get("/author/{author_id}", response_class=HTMLResponse)
async def author_detail(author_id: RecordId, request: Request, database: Database = Depends(get_database)):
    results = await database.parallel(
        author=partial(get_author, author_id=author_id),
        author_books=partial(get_books_by_author, author_id=author_id),
    )
    if results["author"] is None:
        logger.warning("Author %s not found", author_id)
        raise HTTPException(404, "Author not found")
    return render(
        request, "author_detail.html",
        title="Author Detail",
        author=results["author"],
        author_books=results["author_books"],
    )
