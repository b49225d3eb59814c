"""Search filter composed from the configured query terms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SearchFilter:
    """Free-text query restricted by publication type and publication year."""

    query: str
    publication_types: Tuple[str, ...]
    start_year: int
    end_year: int

    @property
    def term(self) -> str:
        publication_types = " OR ".join(
            f'"{publication_type}"[Publication Type]'
            for publication_type in self.publication_types
        )
        return " ".join(
            [
                f"({self.query})",
                "AND",
                "(",
                publication_types,
                ")",
                "AND",
                "(",
                f'"{self.start_year}"[Date - Publication]',
                ":",
                f'"{self.end_year}"[Date - Publication]',
                ")",
            ]
        )

    def __str__(self) -> str:
        return self.term
