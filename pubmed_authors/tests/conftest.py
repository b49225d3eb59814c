from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from pubmed_authors.config import Settings


SAMPLE_EFETCH_XML = """<?xml version="1.0" ?>
<PubmedArticleSet>
  <PubmedArticle>
    <MedlineCitation Status="MEDLINE" Owner="NLM">
      <PMID Version="1">100</PMID>
      <Article PubModel="Print">
        <Journal>
          <JournalIssue CitedMedium="Internet">
            <PubDate>
              <Year>2020</Year>
            </PubDate>
          </JournalIssue>
        </Journal>
        <ArticleTitle>A Study of Gene X Regulation</ArticleTitle>
        <AuthorList CompleteYN="Y">
          <Author ValidYN="Y">
            <LastName>Smith</LastName>
            <ForeName>Jane</ForeName>
            <AffiliationInfo>
              <Affiliation>MIT</Affiliation>
            </AffiliationInfo>
          </Author>
        </AuthorList>
      </Article>
    </MedlineCitation>
  </PubmedArticle>
</PubmedArticleSet>
"""


def esearch_xml(ids: List[str]) -> str:
    id_elements = "".join(f"<Id>{pmid}</Id>" for pmid in ids)
    return (
        "<eSearchResult>"
        f"<Count>{len(ids)}</Count>"
        f"<IdList>{id_elements}</IdList>"
        "</eSearchResult>"
    )


class FakeHttp:
    """Stands in for ``HttpClient``; replays canned bodies in order."""

    def __init__(self, bodies: List[str]) -> None:
        self.bodies = list(bodies)
        self.calls: List[tuple[str, Optional[Dict[str, str]]]] = []

    def get(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        self.calls.append((url, params))
        return self.bodies.pop(0)


@pytest.fixture
def make_settings(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Settings]:
    monkeypatch.delenv("PUBMED_API_KEY", raising=False)

    def _make(**overrides: Any) -> Settings:
        values: Dict[str, Any] = {
            "pubmed_api_key": "test-key",
            "delay_seconds": 0.5,
            "query": "gene therapy",
            "publication_types": ["Journal Article"],
            "keywords": ["gene"],
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def fake_http() -> type[FakeHttp]:
    return FakeHttp


@pytest.fixture
def make_esearch_xml() -> Callable[[List[str]], str]:
    return esearch_xml


@pytest.fixture
def efetch_xml() -> str:
    return SAMPLE_EFETCH_XML
