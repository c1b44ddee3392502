"""Review corpus loading and sampling."""

import csv
import logging
import random
from typing import List, Optional

import pandas as pd

from errors import CorpusLoadError

logger = logging.getLogger(__name__)


def load_reviews(path) -> List[str]:
    """
    Load review sentences from a tab-separated file with a `text` column.

    Rows whose text is empty or not a string are skipped, as are rows with
    the wrong number of fields.
    """
    def skip_bad_line(fields):
        logger.warning(f"Skipping malformed row in {path}: {fields!r}")
        return None

    try:
        df = pd.read_csv(
            path,
            sep="\t",
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            on_bad_lines=skip_bad_line,
            engine="python",
        )
    except FileNotFoundError as e:
        raise CorpusLoadError(f"Failed to load TSV file: {e}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise CorpusLoadError(f"Failed to parse TSV file: {e}") from e

    if "text" not in df.columns:
        raise CorpusLoadError("Failed to parse TSV file: missing 'text' column")

    reviews = [text for text in df["text"] if isinstance(text, str) and text.strip()]
    logger.info(f"Loaded {len(reviews)} reviews from {path}")
    return reviews


def sample_review(reviews: List[str], rng: Optional[random.Random] = None) -> str:
    if not reviews:
        raise CorpusLoadError("No reviews available. Please try again later.")
    rng = rng or random.Random()
    return rng.choice(reviews)
