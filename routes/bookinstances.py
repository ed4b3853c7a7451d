# routes/bookinstances.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from crud.book import get_book_titles
from crud.bookinstance import create_book_instance, get_book_instance, get_book_instances
from database import get_db
from display import url
from models import BOOK_INSTANCE_STATUSES
from schemas import BookInstanceForm, form_payload, validate_form
from views import RecordId, not_implemented, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")


def render_instance_form(request: Request, books, bookinstance=None, selected_book=None, errors=None):
    return render(
        request, "bookinstance_form.html",
        title="Create BookInstance",
        book_list=books,
        statuses=BOOK_INSTANCE_STATUSES,
        bookinstance=bookinstance,
        selected_book=selected_book,
        errors=errors or [],
    )


@router.get("/bookinstances", response_class=HTMLResponse)
async def bookinstance_list(request: Request, db: AsyncSession = Depends(get_db)):
    instances = await get_book_instances(db)
    return render(request, "bookinstance_list.html", title="Book Instance List",
                  bookinstance_list=instances)


@router.get("/bookinstance/create", response_class=HTMLResponse)
async def bookinstance_create_get(request: Request, db: AsyncSession = Depends(get_db)):
    return render_instance_form(request, await get_book_titles(db))


@router.post("/bookinstance/create")
async def bookinstance_create_post(request: Request, db: AsyncSession = Depends(get_db)):
    form = validate_form(BookInstanceForm, form_payload(await request.form()))
    if not form.ok:
        return render_instance_form(
            request, await get_book_titles(db),
            bookinstance=form.values,
            selected_book=form.values["book"],
            errors=form.errors,
        )

    instance = await create_book_instance(db, form.data)
    logger.info("Created book instance %s of book %s", instance.id, instance.book_id)
    return RedirectResponse(url(instance), status_code=303)


@router.get("/bookinstance/{instance_id}/delete")
async def bookinstance_delete_get(instance_id: RecordId):
    return not_implemented("BookInstance", "delete GET")


@router.post("/bookinstance/{instance_id}/delete")
async def bookinstance_delete_post(instance_id: RecordId):
    return not_implemented("BookInstance", "delete POST")


@router.get("/bookinstance/{instance_id}/update")
async def bookinstance_update_get(instance_id: RecordId):
    return not_implemented("BookInstance", "update GET")


@router.post("/bookinstance/{instance_id}/update")
async def bookinstance_update_post(instance_id: RecordId):
    return not_implemented("BookInstance", "update POST")


@router.get("/bookinstance/{instance_id}", response_class=HTMLResponse)
async def bookinstance_detail(instance_id: RecordId, request: Request, db: AsyncSession = Depends(get_db)):
    instance = await get_book_instance(db, instance_id)
    if instance is None:
        logger.warning("Book instance %s not found", instance_id)
        raise HTTPException(404, "Book copy not found")
    return render(request, "bookinstance_detail.html", title="Book:", bookinstance=instance)
