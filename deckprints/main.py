from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckprints.api import deck_router, health_router, preferences_router, symbols_router
from deckprints.config import settings
from deckprints.db.database import init_db
from deckprints.models.failure import KnownError


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


try:
    _version = pkg_version("deckprints")
except PackageNotFoundError:
    _version = "0.0.0"

app = FastAPI(
    title=settings.app_name,
    version=_version,
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Respond with the error's status code and its FailureDetail."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_detail().model_dump(mode="json")},
    )


app.include_router(deck_router)
app.include_router(health_router)
app.include_router(preferences_router)
app.include_router(symbols_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
