"""Convenience re-exports for harvest data models."""

from .article import (
    ArticleRecord,
    ArticleTitle,
    AuthorAggregate,
    AuthorEntry,
    AuthorIndex,
    PlainTitle,
    StructuredTitle,
    decode_title,
)
from .search import SearchFilter

__all__ = [
    "ArticleRecord",
    "ArticleTitle",
    "AuthorAggregate",
    "AuthorEntry",
    "AuthorIndex",
    "PlainTitle",
    "SearchFilter",
    "StructuredTitle",
    "decode_title",
]
