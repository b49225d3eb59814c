"""Filter articles by title keywords and aggregate their authors."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

from pubmed_authors.models import (
    ArticleRecord,
    ArticleTitle,
    AuthorAggregate,
    AuthorEntry,
    AuthorIndex,
    StructuredTitle,
)

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 10


class AuthorAggregator:
    """Builds the author -> {affiliations, titles} index from article records."""

    def __init__(self, keywords: Sequence[str]) -> None:
        self.keywords = [keyword.lower() for keyword in keywords]

    @staticmethod
    def normalize_title(title: Union[ArticleTitle, str, None]) -> str:
        if title is None:
            return ""
        return str(title).strip().lower()

    def validate_title(self, title: Union[ArticleTitle, str, None]) -> bool:
        """True when the normalized title contains any configured keyword."""
        normalized = self.normalize_title(title)
        return any(keyword in normalized for keyword in self.keywords)

    def validate_article(self, article: ArticleRecord, index: int) -> bool:
        title = article.title
        normalized = self.normalize_title(title)
        if not normalized:
            logger.warning("Article #%d is missing title information", index + 1)
            return False

        if not self.validate_title(normalized):
            logger.warning(
                'Article #%d title does not contain keywords: "%s"',
                index + 1,
                normalized,
            )
            return False

        if isinstance(title, StructuredTitle) and not title.text:
            logger.warning(
                "Article #%d has complex title structure: %r",
                index + 1,
                title.markup,
            )

        return True

    @staticmethod
    def format_author_name(author: AuthorEntry) -> str:
        if author.last_name and author.fore_name:
            return f"{author.fore_name} {author.last_name}"
        if author.last_name:
            return author.last_name
        if author.collective_name:
            return author.collective_name
        return ""

    @staticmethod
    def add_affiliations(author: AuthorEntry, affiliations: set[str]) -> None:
        affiliations.update(
            affiliation for affiliation in author.affiliations if affiliation
        )

    def add_article(
        self,
        article: ArticleRecord,
        index: int = 0,
        authors: Optional[AuthorIndex] = None,
    ) -> AuthorIndex:
        """Merge one article into ``authors`` if it passes validation."""
        authors = {} if authors is None else authors
        if not self.validate_article(article, index):
            return authors
        self._merge(article, authors)
        return authors

    def extract_author_info(self, articles: Iterable[ArticleRecord]) -> AuthorIndex:
        articles = list(articles)
        authors: AuthorIndex = {}
        processed = 0
        skipped = 0

        for index, article in enumerate(articles):
            if not self.validate_article(article, index):
                skipped += 1
                continue

            processed += 1
            if processed % PROGRESS_INTERVAL == 0:
                logger.info(
                    "Processed %d/%d articles...", processed, len(articles)
                )
            self._merge(article, authors)

        logger.info(
            "Article processing summary: accepted=%d filtered_out=%d",
            processed,
            skipped,
        )
        if articles:
            logger.info(
                "Acceptance rate: %.1f%%", processed / len(articles) * 100
            )
        return authors

    def _merge(self, article: ArticleRecord, authors: AuthorIndex) -> None:
        title = self.normalize_title(article.title)
        title_with_year = f"{title} ({article.year})"

        for author in article.authors:
            full_name = self.format_author_name(author)
            if not full_name:
                continue
            aggregate = authors.setdefault(full_name, AuthorAggregate())
            aggregate.titles.add(title_with_year)
            self.add_affiliations(author, aggregate.affiliations)


__all__ = ["AuthorAggregator"]
