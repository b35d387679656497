"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from commit_insight.interface.dependencies import shutdown, startup
from commit_insight.interface.error_handlers import register_error_handlers
from commit_insight.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Commit Insight",
        version="1.0.0",
        description=(
            "Takes a GitHub repository (URL or owner/repo) and scores the "
            "quality of its recent commit messages: conventional format, "
            "descriptiveness, merge commits, common words and commit types."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
