"""Minimal pastebin: paste lifecycle, blob storage and expiry reaping."""

__version__ = "0.1.0"
