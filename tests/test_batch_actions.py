from unittest.mock import Mock

from batch_actions import run_batch
from sentiment_model import ClassificationResult


def test_run_batch_counts_actions():
    classifier = Mock()
    classifier.classify_batch.side_effect = lambda batch, batch_size: iter([
        ClassificationResult("POSITIVE", 0.95) if "good" in text else ClassificationResult("NEGATIVE", 0.9)
        for text in batch
    ])

    rows, counts = run_batch(["good film", "bad film", "good cast"], classifier, batch_size=2)

    assert counts == {"OFFER_COUPON": 1, "REQUEST_FEEDBACK": 0, "ASK_REFERRAL": 2}
    assert [row["action"] for row in rows] == ["ASK_REFERRAL", "OFFER_COUPON", "ASK_REFERRAL"]
    assert rows[0]["sentiment"] == "POSITIVE (95.0% confidence)"
    assert classifier.classify_batch.call_count == 2
