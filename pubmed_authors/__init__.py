"""Harvest PubMed authors, their affiliations and their matching works."""

from .config import Settings, load_settings

__all__ = [
    "Settings",
    "load_settings",
]
