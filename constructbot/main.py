import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from constructbot.chat.dependencies import close_chat_service
from constructbot.chat.router import router as chat_router
from constructbot.config import get_client_base_url
from constructbot.conversations.router import router as conversations_router
from constructbot.preferences.router import router as preferences_router
from constructbot.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("ConstructBot API starting")
    yield
    await close_chat_service()
    logger.info("ConstructBot API stopped")


app = FastAPI(
    title="ConstructBot API",
    description="Construction-domain assistant with model fallback",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_client_base_url()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router, prefix="/api")
app.include_router(conversations_router, prefix="/api")
app.include_router(preferences_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "ConstructBot API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "ConstructBot API is running"}
