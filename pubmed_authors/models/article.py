"""Data models for decoded PubMed article records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pubmed_authors.decoding import TEXT_KEY, as_list


@dataclass(frozen=True)
class PlainTitle:
    """Title given as a plain string."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredTitle:
    """Title carrying inline markup (italics, sub/superscripts, ...).

    ``text`` holds the direct text of the element, ``markup`` the decoded
    child elements and attributes.
    """

    text: Optional[str]
    markup: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.text:
            return self.text
        return " ".join(_flatten_text(self.markup))


ArticleTitle = Union[PlainTitle, StructuredTitle]


def decode_title(value: Any) -> Optional[ArticleTitle]:
    """Build the tagged title representation from a decoded XML value."""
    if value is None:
        return None
    if isinstance(value, dict):
        markup = {key: item for key, item in value.items() if key != TEXT_KEY}
        return StructuredTitle(text=value.get(TEXT_KEY), markup=markup)
    return PlainTitle(text=str(value))


@dataclass
class AuthorEntry:
    """
    One author from a PubMed ``AuthorList``.
    """

    # Family name
    last_name: Optional[str] = None

    # Given name(s)
    fore_name: Optional[str] = None

    # Organization credited as author
    collective_name: Optional[str] = None

    # Affiliation strings in document order
    affiliations: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> AuthorEntry:
        if not isinstance(payload, dict):
            return cls()
        affiliations = []
        for info in as_list(payload.get("AffiliationInfo")):
            if not isinstance(info, dict):
                continue
            affiliation = _text(info.get("Affiliation"))
            if affiliation:
                affiliations.append(affiliation)
        return cls(
            last_name=_text(payload.get("LastName")),
            fore_name=_text(payload.get("ForeName")),
            collective_name=_text(payload.get("CollectiveName")),
            affiliations=affiliations,
        )


@dataclass
class ArticleRecord:
    """
    A ``PubmedArticle`` decoded from an EFetch response.
    """

    # PubMed identifier
    pmid: Optional[str] = None

    # Article title, ``None`` when the record carries none
    title: Optional[ArticleTitle] = None

    # Publication year, empty when the journal issue has no Year element
    year: str = ""

    # Authors in listed order
    authors: List[AuthorEntry] = field(default_factory=list)

    # Decoded payload the record was built from
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> ArticleRecord:
        citation = _child(payload, "MedlineCitation")
        article = _child(citation, "Article")
        pub_date = _child(
            _child(_child(article, "Journal"), "JournalIssue"), "PubDate"
        )
        authors = _child(article, "AuthorList").get("Author")
        return cls(
            pmid=_text(citation.get("PMID")),
            title=decode_title(article.get("ArticleTitle")),
            year=_text(pub_date.get("Year")) or "",
            authors=[AuthorEntry.from_payload(author) for author in as_list(authors)],
            raw=payload if isinstance(payload, dict) else {},
        )


@dataclass
class AuthorAggregate:
    """Distinct affiliations and ``title (year)`` works for one author."""

    affiliations: set[str] = field(default_factory=set)
    titles: set[str] = field(default_factory=set)


AuthorIndex = Dict[str, AuthorAggregate]


def _child(value: Any, key: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        return {}
    child = value.get(key)
    return child if isinstance(child, dict) else {}


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
        if value is None:
            return None
    text = str(value)
    return text or None


def _flatten_text(value: Any) -> List[str]:
    if isinstance(value, dict):
        parts: List[str] = []
        for key, item in value.items():
            if key.startswith("@"):
                continue
            parts.extend(_flatten_text(item))
        return parts
    if isinstance(value, list):
        return [part for item in value for part in _flatten_text(item)]
    if value is None:
        return []
    text = str(value).strip()
    return [text] if text else []
