# views.py — template environment shared by every route module
from pathlib import Path as FilePath
from typing import Annotated

from fastapi import Path, Request
from fastapi.responses import PlainTextResponse
from fastapi.templating import Jinja2Templates

from display import FILTERS
from models import MAX_ID

BASE_DIR = FilePath(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.filters.update(FILTERS)

# ids outside the store's integer range can never match a record
RecordId = Annotated[int, Path(ge=1, le=MAX_ID)]


def render(request: Request, name: str, status_code: int = 200, **context):
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def not_implemented(entity: str, action: str) -> PlainTextResponse:
    """Placeholder for catalog operations that have no handler yet."""
    return PlainTextResponse(f"NOT IMPLEMENTED: {entity} {action}")


def mark_selected(options, selected_ids):
    """Pair each option with whether its id is in ``selected_ids``."""
    chosen = {str(i) for i in selected_ids or ()}
    return [{"item": option, "checked": str(option.id) in chosen} for option in options]
