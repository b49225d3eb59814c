from __future__ import annotations

from typing import Dict, List, Sequence

import pytest
import requests

from pubmed_authors.clients.http import HttpClient, RetryPolicy
from pubmed_authors.clients.pubmed import PubMedClient
from pubmed_authors.errors import RequestError


def _article(pmid: str, title: str) -> Dict:
    return {
        "MedlineCitation": {
            "PMID": pmid,
            "Article": {"ArticleTitle": title},
        }
    }


def test_fetch_splits_ids_into_batches(make_settings, sleeps, monkeypatch) -> None:
    client = PubMedClient(make_settings(batch_size=2), sleep=sleeps.append)
    requested: List[List[str]] = []

    def fake_efetch(ids: Sequence[str]) -> Dict:
        requested.append(list(ids))
        articles = [_article(pmid, f"title {pmid}") for pmid in ids]
        value = articles if len(articles) > 1 else articles[0]
        return {"PubmedArticleSet": {"PubmedArticle": value}}

    monkeypatch.setattr(client, "_efetch", fake_efetch)

    records = client.fetch_article_details(["1", "2", "3", "4", "5"])

    assert requested == [["1", "2"], ["3", "4"], ["5"]]
    assert [record.pmid for record in records] == ["1", "2", "3", "4", "5"]
    assert sleeps == [0.5, 0.5]


def test_fetch_skips_batches_without_articles(make_settings, monkeypatch) -> None:
    client = PubMedClient(make_settings(batch_size=1), sleep=lambda _: None)
    responses = [
        {"PubmedArticleSet": ""},
        {"PubmedArticleSet": {"PubmedArticle": _article("9", "gene")}},
    ]
    monkeypatch.setattr(client, "_efetch", lambda ids: responses.pop(0))

    records = client.fetch_article_details(["8", "9"])

    assert [record.pmid for record in records] == ["9"]


def test_fetch_of_no_ids_issues_no_requests(make_settings, fake_http) -> None:
    http = fake_http([])
    client = PubMedClient(make_settings(), http=http)

    assert client.fetch_article_details([]) == []
    assert http.calls == []


def test_efetch_joins_ids_and_decodes_records(
    make_settings, fake_http, efetch_xml
) -> None:
    http = fake_http([efetch_xml])
    client = PubMedClient(make_settings(batch_size=200), http=http)

    records = client.fetch_article_details(["100", "200"])

    url, params = http.calls[0]
    assert url == "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/efetch.fcgi"
    assert params == {
        "db": "pubmed",
        "id": "100,200",
        "retmode": "xml",
        "api_key": "test-key",
    }
    assert len(records) == 1
    record = records[0]
    assert record.pmid == "100"
    assert str(record.title) == "A Study of Gene X Regulation"
    assert record.year == "2020"
    assert record.authors[0].last_name == "Smith"
    assert record.authors[0].affiliations == ["MIT"]


def test_fetch_request_error_propagates(make_settings, sleeps) -> None:
    class FailingSession:
        def __init__(self) -> None:
            self.urls: List[str] = []

        def get(self, url, params=None, timeout=None):
            self.urls.append(url)
            raise requests.HTTPError("502 Bad Gateway")

    session = FailingSession()
    http = HttpClient(
        RetryPolicy(max_attempts=3, delay=0.5),
        session=session,
        sleep=sleeps.append,
    )
    client = PubMedClient(make_settings(batch_size=2), http=http, sleep=sleeps.append)
    records = None

    with pytest.raises(RequestError) as excinfo:
        records = client.fetch_article_details(["1", "2", "3"])

    assert records is None
    assert excinfo.value.url.endswith("efetch.fcgi")
    assert len(session.urls) == 3
    assert sleeps == [0.5, 0.5]
