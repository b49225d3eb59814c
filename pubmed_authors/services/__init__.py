"""Service layer for filtering articles and exporting author data."""

from .authors import AuthorAggregator
from .export import author_index_to_dict, author_index_to_frame, write_author_index

__all__ = [
    "AuthorAggregator",
    "author_index_to_dict",
    "author_index_to_frame",
    "write_author_index",
]
