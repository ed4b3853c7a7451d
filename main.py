# main.py — Local Library: app factory, store lifespan and error pages
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, configure_logging, settings as default_settings
from database import Database
from routes import authors, bookinstances, books, catalog, genres
from views import BASE_DIR, render

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.database_url, echo=settings.echo_sql)
        await database.init()
        app.state.database = database
        try:
            yield
        finally:
            await database.close()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    for module in (catalog, books, authors, genres, bookinstances):
        app.include_router(module.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return render(request, "error.html", status_code=exc.status_code,
                      title="Error", message=exc.detail, status=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        # only path ids are validated by FastAPI; a malformed id names no record
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return render(request, "error.html", status_code=404,
                      title="Error", message="Not Found", status=404)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error(request: Request, exc: SQLAlchemyError):
        logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
        return render(request, "error.html", status_code=500,
                      title="Error", message="Storage error", status=500)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=default_settings.debug)
