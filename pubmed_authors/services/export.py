"""Write the author index to JSON or CSV."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

import pandas as pd

from pubmed_authors.models import AuthorIndex

COLUMNS = ["author", "affiliations", "titles", "affiliation_count", "title_count"]
_SEPARATOR = "; "


def author_index_to_frame(index: AuthorIndex) -> pd.DataFrame:
    """One row per author, multi-valued cells sorted and joined."""
    rows = [
        {
            "author": name,
            "affiliations": _SEPARATOR.join(sorted(aggregate.affiliations)),
            "titles": _SEPARATOR.join(sorted(aggregate.titles)),
            "affiliation_count": len(aggregate.affiliations),
            "title_count": len(aggregate.titles),
        }
        for name, aggregate in sorted(index.items())
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def author_index_to_dict(index: AuthorIndex) -> Dict[str, Dict[str, List[str]]]:
    return {
        name: {
            "affiliations": sorted(aggregate.affiliations),
            "titles": sorted(aggregate.titles),
        }
        for name, aggregate in sorted(index.items())
    }


def write_author_index(index: AuthorIndex, path: Path) -> Path:
    """Persist ``index``; ``.json`` paths get JSON, anything else CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        path.write_text(
            json.dumps(author_index_to_dict(index), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    else:
        author_index_to_frame(index).to_csv(path, index=False)
    return path


__all__ = [
    "author_index_to_dict",
    "author_index_to_frame",
    "write_author_index",
]
