
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from app.middleware.ratelimit import RateLimitMiddleware, client_key
from app.config import settings
from app.db.session import init_db
from app.errors import DocsError
from app.log import setup_logging
from app.auth.routes import router as auth_router
from app.documents.routes import router as documents_router
from app.versioning.routes import router as versions_router

async def docs_error_handler(request: Request, exc: DocsError):
    if exc.status_code >= 500:
        logger.error("{} {} failed: {!r}", request.method, request.url.path, exc)
    body = {"detail": exc.message, "error_type": exc.error_type}
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)

def create_app(*, create_tables: bool = True) -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=client_key,
    )

    app.add_exception_handler(DocsError, docs_error_handler)

    app.include_router(auth_router)
    app.include_router(documents_router)
    app.include_router(versions_router)

    if create_tables:
        @app.on_event("startup")
        def on_startup():
            init_db()

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
