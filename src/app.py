from __future__ import annotations

from fastapi import FastAPI

from config import configure_logging, load_env_file
from web.routes import admin


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    load_env_file()
    configure_logging()

    app = FastAPI(
        title="Benchmark Runs ETL API",
        version="0.1.0",
        description="Upload benchmark runs and rebuild the tables derived from them.",
    )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(admin.router)

    return app


app = create_app()
