from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from rideseat.core.config import settings
from rideseat.core.errors import register_exception_handlers
from rideseat.core.logging import setup_logging
from rideseat.api.v1.api import api_router
from rideseat.db.store import store
from rideseat.seed import run as run_seed


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # state lives in process memory only: every start begins from the seed data
    if settings.SEED_DATA:
        run_seed(store)
    logger.info("{} started (env={})", settings.APP_NAME, settings.ENV)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS: use CORS_ORIGINS from env in production; default to localhost for dev
_default_origins = [
    "http://127.0.0.1:8081", "http://localhost:8081",
    "http://127.0.0.1:5173", "http://localhost:5173",
]
_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] if settings.CORS_ORIGINS else _default_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health")
def health():
    return {"status": "ok"}
