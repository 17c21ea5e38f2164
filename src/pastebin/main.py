"""FastAPI application entry point."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .lifecycle import run_periodic_reaper
from .logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None, *, start_reaper: bool = True) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    cfg = config or load_config()
    configure_logging(cfg.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not start_reaper:
            yield
            return
        shutdown = asyncio.Event()
        task = asyncio.create_task(
            run_periodic_reaper(
                paste_repo=app.state.paste_repo,
                blob_store=app.state.blob_store,
                settings=cfg.reaper,
                shutdown_event=shutdown,
            )
        )
        logger.info("reaper.started", extra={"interval_seconds": cfg.reaper.interval_seconds})
        try:
            yield
        finally:
            shutdown.set()
            await task
            logger.info("reaper.stopped")

    app = FastAPI(title="Pastebin", lifespan=lifespan)
    include_routers(app, cfg)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


def main() -> None:
    config = load_config()
    uvicorn.run(create_app(config), host=config.listen_host, port=config.listen_port)
