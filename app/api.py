import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from dotenv import load_dotenv

from app.routes import dashboard, directory, editor, pricing

# Load `.env` even when uvicorn is launched without `dotenv run`.
load_dotenv(override=True)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not os.getenv("DATABASE_URL"):
        log.warning("DATABASE_URL is not set; profile pages will fail until it is configured.")
    yield


app = FastAPI(lifespan=lifespan)


app.include_router(directory.router)
app.include_router(pricing.router)
app.include_router(dashboard.router)
app.include_router(editor.router)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault(
        "Content-Security-Policy",
        "default-src 'self'; img-src 'self' data: https:; style-src 'self' 'unsafe-inline'; "
        "font-src 'self' data:; connect-src 'self';",
    )
    return response
