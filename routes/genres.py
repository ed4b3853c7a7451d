# routes/genres.py
import logging
from functools import partial

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from crud.book import get_books_by_genre
from crud.genre import add_or_find_genre, get_genre, get_genres
from database import Database, get_database, get_db
from display import url
from schemas import GenreForm, form_payload, validate_form
from views import RecordId, not_implemented, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")


@router.get("/genres", response_class=HTMLResponse)
async def genre_list(request: Request, database: Database = Depends(get_database)):
    async with database.session() as db:
        genres = await get_genres(db)
    return render(request, "genre_list.html", title="Genre List", genre_list=genres)


@router.get("/genre/create", response_class=HTMLResponse)
async def genre_create_get(request: Request):
    return render(request, "genre_form.html", title="Create Genre", genre=None, errors=[])


@router.post("/genre/create")
async def genre_create_post(request: Request, db: AsyncSession = Depends(get_db)):
    form = validate_form(GenreForm, form_payload(await request.form()))
    if not form.ok:
        return render(request, "genre_form.html", title="Create Genre",
                      genre=form.values, errors=form.errors)

    genre, created = await add_or_find_genre(db, form.data)
    if created:
        logger.info("Created genre %s", genre.id)
    else:
        logger.info("Genre %r already exists as %s", genre.name, genre.id)
    return RedirectResponse(url(genre), status_code=303)


@router.get("/genre/{genre_id}/delete")
async def genre_delete_get(genre_id: RecordId):
    return not_implemented("Genre", "delete GET")


@router.post("/genre/{genre_id}/delete")
async def genre_delete_post(genre_id: RecordId):
    return not_implemented("Genre", "delete POST")


@router.get("/genre/{genre_id}/update")
async def genre_update_get(genre_id: RecordId):
    return not_implemented("Genre", "update GET")


@router.post("/genre/{genre_id}/update")
async def genre_update_post(genre_id: RecordId):
    return not_implemented("Genre", "update POST")


@router.get("/genre/{genre_id}", response_class=HTMLResponse)
async def genre_detail(genre_id: RecordId, request: Request, database: Database = Depends(get_database)):
    results = await database.parallel(
        genre=partial(get_genre, genre_id=genre_id),
        genre_books=partial(get_books_by_genre, genre_id=genre_id),
    )
    if results["genre"] is None:
        logger.warning("Genre %s not found", genre_id)
        raise HTTPException(404, "Genre not found")
    return render(
        request, "genre_detail.html",
        title="Genre Details",
        genre=results["genre"],
        genre_books=results["genre_books"],
    )
