"""
Unit tests for the business decision engine.
"""

import random

import pytest

from business_logic import (
    ACTIONS,
    ActionCode,
    determine_action,
    follow_ups,
    generate_coupon_code,
    normalized_score,
    referral_link,
)
from errors import InvalidConfidence


GRID = [i / 100 for i in range(101)]


def test_positive_high_confidence_asks_referral():
    action = determine_action(0.95, "POSITIVE")
    assert action.action_code == ActionCode.ASK_REFERRAL
    assert "thrilled" in action.message
    assert action.style_class == "referral"
    assert action.color_hint == "#3b82f6"
    assert action.icon_hint == "fa-user-friends"


def test_negative_high_confidence_offers_coupon():
    action = determine_action(0.95, "NEGATIVE")
    assert normalized_score(0.95, "NEGATIVE") == pytest.approx(0.05)
    assert action.action_code == ActionCode.OFFER_COUPON
    assert "sorry" in action.message
    assert action.style_class == "coupon"
    assert action.color_hint == "#dc3545"
    assert action.icon_hint == "fa-fire"


def test_middling_scores_request_feedback():
    assert determine_action(0.55, "POSITIVE").action_code == ActionCode.REQUEST_FEEDBACK
    assert normalized_score(0.55, "NEGATIVE") == pytest.approx(0.45)
    assert determine_action(0.55, "NEGATIVE").action_code == ActionCode.REQUEST_FEEDBACK
    feedback = ACTIONS[ActionCode.REQUEST_FEEDBACK]
    assert feedback.icon_hint == "fa-clipboard-question"
    assert feedback.color_hint == "#6b7280"


@pytest.mark.parametrize("confidence,expected", [
    (0.40, ActionCode.OFFER_COUPON),
    (0.4000001, ActionCode.REQUEST_FEEDBACK),
    (0.6999999, ActionCode.REQUEST_FEEDBACK),
    (0.70, ActionCode.ASK_REFERRAL),
    (0.0, ActionCode.OFFER_COUPON),
    (1.0, ActionCode.ASK_REFERRAL),
])
def test_positive_boundaries(confidence, expected):
    assert determine_action(confidence, "POSITIVE").action_code == expected


def test_positive_bands_over_grid():
    for c in GRID:
        code = determine_action(c, "POSITIVE").action_code
        if c <= 0.40:
            assert code == ActionCode.OFFER_COUPON, c
        elif c >= 0.70:
            assert code == ActionCode.ASK_REFERRAL, c
        else:
            assert code == ActionCode.REQUEST_FEEDBACK, c


def test_negative_bands_over_grid():
    # Avoid the exact boundaries here, 1 - c is not always exact in floating point
    for c in GRID:
        if c in (0.30, 0.60):
            continue
        code = determine_action(c, "NEGATIVE").action_code
        if c > 0.60:
            assert code == ActionCode.OFFER_COUPON, c
        elif c < 0.30:
            assert code == ActionCode.ASK_REFERRAL, c
        else:
            assert code == ActionCode.REQUEST_FEEDBACK, c


@pytest.mark.parametrize("confidence", [0.0, 0.01, 0.4, 0.5, 0.99, 1.0])
def test_unknown_label_always_requests_feedback(confidence):
    assert normalized_score(confidence, "UNKNOWN_LABEL") == 0.5
    assert determine_action(confidence, "UNKNOWN_LABEL").action_code == ActionCode.REQUEST_FEEDBACK


def test_label_comparison_is_case_sensitive():
    # lower-case labels are treated as unknown
    assert determine_action(0.99, "positive").action_code == ActionCode.REQUEST_FEEDBACK
    assert determine_action(0.99, "negative").action_code == ActionCode.REQUEST_FEEDBACK


@pytest.mark.parametrize("confidence", [-0.1, 1.5, float("nan"), float("inf"), "0.9", None, True])
def test_invalid_confidence_rejected(confidence):
    with pytest.raises(InvalidConfidence):
        determine_action(confidence, "POSITIVE")


def test_invalid_confidence_is_value_error():
    with pytest.raises(ValueError):
        determine_action(-1, "NEGATIVE")


def test_same_input_same_action():
    assert determine_action(0.8, "POSITIVE") is determine_action(0.8, "POSITIVE")


def test_follow_ups_per_action():
    assert [f.kind for f in follow_ups(ActionCode.OFFER_COUPON)] == ["coupon", "support"]
    assert [f.kind for f in follow_ups(ActionCode.REQUEST_FEEDBACK)] == ["survey", "call"]
    assert [f.kind for f in follow_ups(ActionCode.ASK_REFERRAL)] == ["referral", "testimonial"]

    survey = follow_ups("REQUEST_FEEDBACK")[0]
    assert survey.url == "https://forms.gle/g1KwfQmetxRGoHQy6"


def test_coupon_code_format():
    code = generate_coupon_code(random.Random(7))
    assert code.startswith("SAVE50-")
    suffix = code[len("SAVE50-"):]
    assert len(suffix) == 6
    assert suffix.isalnum() and suffix.upper() == suffix


def test_referral_link_uses_user_id_prefix():
    assert referral_link("abcdef1234567890") == "https://example.com/ref/abcdef12"
