"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env before settings are read by the routes' wiring
load_dotenv()

from leadengine.adapters.inbound.http import routes  # noqa: E402
from leadengine.infrastructure.config.settings import settings  # noqa: E402
from leadengine.infrastructure.db import dispose_engine  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the session reaper on startup and stop it on shutdown."""
    routes.session_store.start_reaper(settings.session_reaper_interval_seconds)
    try:
        yield
    finally:
        await routes.session_store.stop_reaper()
        dispose_engine()


app = FastAPI(
    title="Lead Capture Chat Engine",
    description="Rule-based chat assistant that answers service questions and captures leads",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(routes.router)
