# routes/catalog.py — home page
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from functools import partial

from crud.author import count_authors
from crud.book import count_books
from crud.bookinstance import count_book_instances
from crud.genre import count_genres
from database import Database, get_database
from views import render

router = APIRouter()

@router.get("/", include_in_schema=False)
async def root():
    return RedirectResponse("/catalog/", status_code=303)

@router.get("/catalog/", response_class=HTMLResponse)
async def index(request: Request, database: Database = Depends(get_database)):
    counts = await database.parallel(
        book_count=count_books,
        book_instance_count=count_book_instances,
        book_instance_available_count=partial(count_book_instances, status="Available"),
        author_count=count_authors,
        genre_count=count_genres,
    )
    return render(request, "index.html", title="Local Library Home", data=counts)
