"""
CodePatch Backend - FastAPI Application Entry Point
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import agent, config, diff
from services.config_manager import ConfigManager

logger = logging.getLogger("codepatch")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a stream handler to the root logger (once) and set its level"""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    # Startup: create the config manager unless one was injected
    if app.state.config_manager is None:
        app.state.config_manager = ConfigManager()
    config_manager = app.state.config_manager

    configure_logging(config_manager.get("logging", {}).get("level", "INFO"))
    logger.info("Starting CodePatch Backend (config: %s)", config_manager.config_file)

    yield
    logger.info("Shutting down CodePatch Backend")


def create_app(config_manager: ConfigManager | None = None) -> FastAPI:
    """Build the application; the ConfigManager lives for the app's lifetime"""
    app = FastAPI(
        title="CodePatch Backend",
        description="Line diff/patch service for the browser IDE",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config_manager = config_manager

    # CORS middleware for the browser editor
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
    app.include_router(agent.router, prefix="/api/agent", tags=["agent"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "codepatch-backend"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    manager = ConfigManager()
    server = manager.get("server", {})
    uvicorn.run(
        create_app(manager),
        host=server.get("host", "0.0.0.0"),
        port=server.get("port", 8000),
    )
