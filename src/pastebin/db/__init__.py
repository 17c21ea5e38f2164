"""Database models and schema helpers."""

from .db_init import init_db
from .db_models import Base, PasteModel

__all__ = ["Base", "PasteModel", "init_db"]
