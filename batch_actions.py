"""
Run the whole review corpus through the classifier and decision engine.

Prints how often each business action would be taken and saves the
per-review decisions to a JSON file. No telemetry is sent.
"""

import argparse
import json
import logging
import sys

from tqdm import tqdm

import config
from business_logic import ActionCode, determine_action
from errors import ReviewActionError
from reviews import load_reviews
from sentiment_model import SentimentClassifier, sentiment_bucket, sentiment_summary

logger = logging.getLogger(__name__)


def run_batch(reviews, classifier: SentimentClassifier, batch_size: int = config.BATCH_SIZE):
    """Classify every review and return (rows, counts per action code)."""
    rows = []
    counts = {code.value: 0 for code in ActionCode}

    for i in tqdm(range(0, len(reviews), batch_size)):
        batch = reviews[i:i + batch_size]
        for text, result in zip(batch, classifier.classify_batch(batch, batch_size=batch_size)):
            action = determine_action(result.confidence, result.raw_label)
            counts[action.action_code.value] += 1
            rows.append({
                "review": text,
                "label": result.raw_label,
                "confidence": round(result.confidence, 4),
                "sentiment_bucket": sentiment_bucket(result),
                "sentiment": sentiment_summary(result),
                "action": action.action_code.value,
            })

    return rows, counts


def main():
    parser = argparse.ArgumentParser(description="Score a review corpus with the business decision engine")
    parser.add_argument("--reviews", default=config.REVIEWS_PATH, help="TSV file with a 'text' column")
    parser.add_argument("--output", default="action_results.json", help="Where to write per-review results")
    parser.add_argument("--batch-size", type=int, default=config.BATCH_SIZE)
    parser.add_argument("--log-level", default=config.LOG_LEVEL, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    config.setup_logging(args.log_level)

    try:
        reviews = load_reviews(args.reviews)
    except ReviewActionError as e:
        logger.error(str(e))
        sys.exit(1)

    classifier = SentimentClassifier()
    if not classifier.load():
        sys.exit(1)

    print(f"\nScoring {len(reviews)} reviews with {classifier.model_name}...")
    try:
        rows, counts = run_batch(reviews, classifier, batch_size=args.batch_size)
    except ReviewActionError as e:
        logger.error(f"Batch scoring failed: {e}", exc_info=True)
        sys.exit(1)

    total = max(1, len(rows))
    for code, count in counts.items():
        print(f"{code}: {count} ({count / total:.1%})")

    with open(args.output, "w") as f:
        json.dump({"counts": counts, "results": rows}, f, indent=2)
    print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
