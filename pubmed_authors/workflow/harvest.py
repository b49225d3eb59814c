"""Run the search, fetch and aggregate stages in order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from pubmed_authors.clients.pubmed import PubMedClient
from pubmed_authors.config import Settings, load_settings
from pubmed_authors.models import ArticleRecord, AuthorIndex
from pubmed_authors.services.authors import AuthorAggregator
from pubmed_authors.services.export import write_author_index

logger = logging.getLogger(__name__)


@dataclass
class HarvestState:
    ids: List[str] = field(default_factory=list)
    articles: List[ArticleRecord] = field(default_factory=list)
    authors: AuthorIndex = field(default_factory=dict)


def run_pipeline(
    *,
    settings: Settings | None = None,
    client: PubMedClient | None = None,
) -> HarvestState:
    """Search PubMed, fetch every hit and build the author index.

    ``RequestError`` and ``NoResultsError`` propagate unchanged; nothing
    collected before the failure is returned.
    """
    resolved_settings = settings or load_settings()
    client = client or PubMedClient(resolved_settings)
    aggregator = AuthorAggregator(resolved_settings.keywords)
    state = HarvestState()

    logger.info("Starting stage: search")
    state.ids = client.search_articles()
    logger.info("Completed stage: search")

    logger.info("Starting stage: fetch")
    state.articles = client.fetch_article_details(state.ids)
    logger.info("Completed stage: fetch")

    logger.info("Starting stage: aggregate")
    state.authors = aggregator.extract_author_info(state.articles)
    logger.info("Completed stage: aggregate (%d authors)", len(state.authors))

    if resolved_settings.output_path is not None:
        path = write_author_index(state.authors, resolved_settings.output_path)
        logger.info("Wrote author index to %s", path)

    return state


__all__ = ["HarvestState", "run_pipeline"]
