"""Helpers for searching and fetching articles from PubMed E-utilities."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from pubmed_authors.clients.http import HttpClient, RetryPolicy
from pubmed_authors.config import Settings, load_settings
from pubmed_authors.decoding import as_list, decode_xml
from pubmed_authors.errors import NoResultsError
from pubmed_authors.models import ArticleRecord, SearchFilter

logger = logging.getLogger(__name__)


class PubMedClient:
    """Client for the ESearch and EFetch endpoints."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        http: Optional[HttpClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or load_settings()
        self.api_key = self.settings.require_api_key()
        self._sleep = sleep
        self._http = http or HttpClient(
            RetryPolicy(
                max_attempts=self.settings.retry_attempts,
                delay=self.settings.delay_seconds,
            ),
            timeout=self.settings.request_timeout,
            sleep=sleep,
        )

    def build_search_filter(self) -> SearchFilter:
        return SearchFilter(
            query=self.settings.query,
            publication_types=tuple(self.settings.publication_types),
            start_year=self.settings.start_year,
            end_year=self.settings.end_year,
        )

    def search_articles(self) -> List[str]:
        """Collect article ids page by page until exhausted or capped.

        ``max_results`` bounds the page offset, not the id count: a page is
        requested whenever its offset is below the cap, so the last page may
        carry the total past ``max_results``.
        """
        term = self.build_search_filter().term
        retmax = self.settings.default_retmax
        max_results = self.settings.max_results
        all_ids: List[str] = []
        retstart = 0

        while retstart < max_results:
            if retstart == 0:
                logger.info("Connecting to PubMed API, search query: %s", term)
            else:
                logger.info(
                    "Fetching results page %d...", retstart // retmax + 1
                )

            payload = self._esearch(term, retstart=retstart, retmax=retmax)
            ids = self._page_ids(payload)
            if ids is None:
                break

            all_ids.extend(ids)

            if len(ids) < retmax:
                break
            retstart += retmax

            if retstart < max_results:
                logger.info("Waiting between pagination requests...")
                self._sleep(self.settings.delay_seconds)

        if not all_ids:
            raise NoResultsError(term)
        logger.info("Total articles found: %d", len(all_ids))
        return all_ids

    def fetch_article_details(self, ids: Sequence[str]) -> List[ArticleRecord]:
        """Fetch full records for ``ids`` in sequential batches."""
        batch_size = self.settings.batch_size
        batches = [
            list(ids[index : index + batch_size])
            for index in range(0, len(ids), batch_size)
        ]
        logger.info("Will process articles in %d batches", len(batches))

        articles: List[ArticleRecord] = []
        for number, batch in enumerate(batches, start=1):
            logger.info(
                "Fetching batch %d/%d (%d articles)...",
                number,
                len(batches),
                len(batch),
            )
            payload = self._efetch(batch)
            article_set = payload.get("PubmedArticleSet")
            fetched = (
                article_set.get("PubmedArticle")
                if isinstance(article_set, dict)
                else None
            )
            articles.extend(
                ArticleRecord.from_payload(item) for item in as_list(fetched)
            )

            if number < len(batches):
                logger.info("Waiting between batches...")
                self._sleep(self.settings.delay_seconds)

        return articles

    @staticmethod
    def _page_ids(payload: Dict[str, Any]) -> Optional[List[str]]:
        result = payload.get("eSearchResult")
        id_list = result.get("IdList") if isinstance(result, dict) else None
        if not isinstance(id_list, dict) or not id_list.get("Id"):
            return None
        return [str(value) for value in as_list(id_list["Id"])]

    def _esearch(self, term: str, *, retstart: int, retmax: int) -> Dict[str, Any]:
        params = {
            "db": "pubmed",
            "term": term,
            "retmax": str(retmax),
            "retstart": str(retstart),
            "api_key": self.api_key,
        }
        body = self._http.get(f"{self.settings.base_url}esearch.fcgi", params)
        return decode_xml(body)

    def _efetch(self, ids: Sequence[str]) -> Dict[str, Any]:
        params = {
            "db": "pubmed",
            "id": ",".join(ids),
            "retmode": "xml",
            "api_key": self.api_key,
        }
        body = self._http.get(f"{self.settings.base_url}efetch.fcgi", params)
        return decode_xml(body)


__all__ = ["PubMedClient"]
