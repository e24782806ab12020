import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.v1 import routers
from app.core.config import settings
from app.db.session import connect_db_pool, close_db_pool

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    Path(settings.MEDIA_ROOT, "avatars").mkdir(parents=True, exist_ok=True)
    await connect_db_pool()
    yield
    await close_db_pool()

app = FastAPI(
    title="Personal Bank Accounts API",
    description="Managing user profiles, bank cards, currency rates and messages",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(routers.router)

media_files = StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False)
app.mount(settings.MEDIA_URL, media_files, name="media")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Internal Server Error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unknown error occurred."},
    )


@app.get("/")
async def root():
    return {"message": "Welcome to Personal Bank Accounts API"}
