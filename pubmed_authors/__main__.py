"""Entry point for ``python -m pubmed_authors``."""

from __future__ import annotations

import logging
import sys

from pydantic import ValidationError

from pubmed_authors.config import load_settings
from pubmed_authors.errors import HarvestError
from pubmed_authors.workflow import run_pipeline

logger = logging.getLogger("pubmed_authors")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main() -> int:
    try:
        settings = load_settings()
    except ValidationError as exc:
        logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
        logger.error("Invalid configuration: %s", exc)
        return 1

    logging.basicConfig(level=settings.log_level.upper(), format=_LOG_FORMAT)
    try:
        settings.require_api_key()
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    try:
        state = run_pipeline(settings=settings)
    except HarvestError as exc:
        logger.error("Harvest failed: %s", exc)
        return 1

    logger.info("Collected %d authors", len(state.authors))
    return 0


if __name__ == "__main__":
    sys.exit(main())
