"""Dependency wiring helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .api.paste_api import build_paste_router
from .config import AppConfig
from .media.blob_store import BlobStore
from .pastes.identifiers import IdentifierGenerator
from .pastes.paste_service import PasteService
from .repositories.paste_repository import PasteRepository


def build_paste_service(config: AppConfig) -> PasteService:
    blob_store = BlobStore(config.storage_root)
    return PasteService(
        blob_store=blob_store,
        paste_repo=PasteRepository(config.session_factory),
        id_generator=IdentifierGenerator(blob_store),
        limits=config.limits,
    )


def include_routers(app: FastAPI, config: AppConfig) -> PasteService:
    """Mount routers and attach the shared components to ``app.state``."""
    paste_service = build_paste_service(config)

    app.state.config = config
    app.state.paste_service = paste_service
    app.state.blob_store = paste_service.blob_store
    app.state.paste_repo = paste_service.paste_repo

    app.include_router(
        build_paste_router(
            paste_service,
            limits=config.limits,
            history_enabled=config.history_enabled,
        )
    )
    return paste_service
