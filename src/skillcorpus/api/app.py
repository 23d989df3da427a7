"""FastAPI application factory."""

from fastapi import FastAPI

from skillcorpus import __version__
from skillcorpus.api.routers import lint, skills
from skillcorpus.core.context import SharedContext


def create_app(context: SharedContext) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Skill Corpus API",
        description="HTTP API for browsing and linting a skill corpus",
        version=__version__,
    )
    app.state.context = context

    app.include_router(skills.router, prefix="/skills", tags=["skills"])
    app.include_router(lint.router, prefix="/lint", tags=["lint"])

    return app
