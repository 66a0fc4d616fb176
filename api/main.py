from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from albums import router as albums_router
from artists import router as artists_router
from core import db, settings
from core.log import configure_logging
from core.responses import install_error_handlers
from songs import router as songs_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One pool per process, handed to repositories through app.state.
    pool = await db.create_pool()
    app.state.database = db.Database(pool, timeout=settings.db_command_timeout())
    try:
        yield
    finally:
        app.state.database = None
        await db.close_pool(pool)


def create_app() -> FastAPI:
    app = FastAPI(title="music-catalog", lifespan=lifespan)

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    install_error_handlers(app)

    app.include_router(artists_router.router, tags=["artists"])
    app.include_router(albums_router.router, tags=["albums"])
    app.include_router(songs_router.router, tags=["songs"])

    @app.get("/ping")
    def ping() -> dict:
        return {"message": "pong"}

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
