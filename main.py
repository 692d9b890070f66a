import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from config import Settings, load_settings
from exceptions import (
    ConflictError,
    NotFoundError,
    PayloadValidationError,
    StoreFailure,
    format_errors,
)
from routes import walking_routes, users, progress, saved_routes
from store import EntityStore
from utils.logger import setup_api_logger
from utils.seed import seed_demo_data


async def _body_text(request: Request) -> str:
    try:
        body = await request.body()
    except Exception:
        body = b""
    return body.decode('utf-8', errors='replace')


def _register_exception_handlers(app: FastAPI, api_logger) -> None:

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = format_errors(exc.errors())
        api_logger.warning("Invalid request on %s %s | errors=%s",
                           request.method, request.url.path, errors)
        return JSONResponse(status_code=400, content={"detail": "Invalid request data", "errors": errors})

    @app.exception_handler(PayloadValidationError)
    async def payload_validation_handler(request: Request, exc: PayloadValidationError):
        api_logger.warning("Invalid payload on %s %s | errors=%s",
                           request.method, request.url.path, exc.errors)
        return JSONResponse(status_code=400, content={"detail": exc.detail, "errors": exc.errors})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        api_logger.warning("Not found on %s %s | detail=%s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        api_logger.warning("Conflict on %s %s | detail=%s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=409, content={"detail": exc.detail})

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure):
        body = await _body_text(request)
        api_logger.error("Store failure on %s %s | body=%s | error=%s",
                         request.method, request.url.path, body, str(exc))
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        body = await _body_text(request)
        api_logger.warning("HTTPException on %s %s | status=%s | body=%s | detail=%s",
                           request.method, request.url.path, exc.status_code, body, str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # log request info and stacktrace
        body = await _body_text(request)
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        api_logger.error("Unhandled exception on %s %s | body=%s | error=%s\n%s",
                         request.method, request.url.path, body, str(exc), tb)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def create_app(settings: Optional[Settings] = None, store: Optional[EntityStore] = None) -> FastAPI:
    """Build the API around one store.

    The store lives as long as the app; pass one in to control its lifetime
    (tests build a fresh in-memory store per test).
    """
    settings = settings or load_settings()
    api_logger = setup_api_logger(settings.log_path)

    if store is None:
        store = EntityStore(settings.database_url)
    if settings.seed_demo_data:
        seed_demo_data(store)

    app = FastAPI(title=settings.app_title)
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, api_logger)

    app.include_router(walking_routes.router)
    app.include_router(users.router)
    app.include_router(progress.router)
    app.include_router(saved_routes.router)

    @app.get("/")
    def root():
        return {"message": "Welcome to RouteWise API"}

    api_logger.info("API started (database=%s, seeded=%s)", store.engine.url.render_as_string(hide_password=True), settings.seed_demo_data)
    return app


if __name__ == "__main__":
    import uvicorn

    # a factory, so importing this module builds nothing
    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=8000)
