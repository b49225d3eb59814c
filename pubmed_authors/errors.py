"""Exceptions raised by the harvest pipeline."""

from __future__ import annotations


class HarvestError(Exception):
    """Base class for unrecoverable harvest failures."""


class RequestError(HarvestError):
    """An HTTP request exhausted its retry budget."""

    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(f"Request to {url} failed after {attempts} attempts")
        self.url = url
        self.attempts = attempts


class NoResultsError(HarvestError):
    """Search pagination finished without collecting any article ids."""

    def __init__(self, term: str) -> None:
        super().__init__("No article IDs found in the search response")
        self.term = term


__all__ = ["HarvestError", "NoResultsError", "RequestError"]
