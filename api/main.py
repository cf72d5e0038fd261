# api/main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.sa.database import db
from core.seed import seed_sample_books
from api.errors import register_exception_handlers
from api.routes.books import router as books_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def seeding_enabled() -> bool:
    return os.getenv("BOOKS_SEED_DATA", "true").strip().lower() not in ("0", "false", "no", "off")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema and load sample data on startup"""
    logger.info("Books service starting up...")
    db.init_db()
    if seeding_enabled():
        with db.get_db() as session:
            seed_sample_books(session)
    yield
    db.dispose()
    logger.info("Books service shutting down...")


app = FastAPI(
    title="Books Service",
    description="CRUD and search API for a catalog of books",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(books_router)


@app.get("/health", tags=["system"])
def health() -> Dict[str, str]:
    return {"status": "healthy", "service": "books-service"}
