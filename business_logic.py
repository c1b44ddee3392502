"""
Business decision engine.

Maps a sentiment classification onto one of three canned customer actions:
a discount coupon for unhappy reviewers, a feedback request for lukewarm
ones and a referral ask for happy ones.
"""

import math
import random
import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

import config
from errors import InvalidConfidence


class ActionCode(str, Enum):
    OFFER_COUPON = "OFFER_COUPON"
    REQUEST_FEEDBACK = "REQUEST_FEEDBACK"
    ASK_REFERRAL = "ASK_REFERRAL"


@dataclass(frozen=True)
class Action:
    """What the UI shows once a review has been classified."""
    action_code: ActionCode
    message: str
    color_hint: str
    icon_hint: str  # Font Awesome icon name
    style_class: str


ACTIONS: Dict[ActionCode, Action] = {
    ActionCode.OFFER_COUPON: Action(
        action_code=ActionCode.OFFER_COUPON,
        message="We are truly sorry for your negative experience. Please accept this 50% discount coupon.",
        color_hint="#dc3545",
        icon_hint="fa-fire",
        style_class="coupon",
    ),
    ActionCode.REQUEST_FEEDBACK: Action(
        action_code=ActionCode.REQUEST_FEEDBACK,
        message="Thank you for your feedback! Could you tell us how we can improve?",
        color_hint="#6b7280",
        icon_hint="fa-clipboard-question",
        style_class="feedback",
    ),
    ActionCode.ASK_REFERRAL: Action(
        action_code=ActionCode.ASK_REFERRAL,
        message="We're thrilled you enjoyed your experience! Refer a friend and both of you will earn rewards.",
        color_hint="#3b82f6",
        icon_hint="fa-user-friends",
        style_class="referral",
    ),
}


def _check_confidence(confidence) -> float:
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise InvalidConfidence(confidence)
    if math.isnan(confidence) or not 0.0 <= confidence <= 1.0:
        raise InvalidConfidence(confidence)
    return float(confidence)


def normalized_score(confidence: float, raw_label: str) -> float:
    """
    Rescale a model confidence so that 0 is the worst sentiment and 1 the best.

    Labels are compared case-sensitively. Anything other than POSITIVE or
    NEGATIVE maps to a neutral 0.5 and the confidence is ignored.
    """
    confidence = _check_confidence(confidence)
    if raw_label == "POSITIVE":
        return confidence
    if raw_label == "NEGATIVE":
        return 1.0 - confidence
    return 0.5


def determine_action(confidence: float, raw_label: str) -> Action:
    """Pick the business action for a classified review."""
    score = normalized_score(confidence, raw_label)

    if score <= config.COUPON_THRESHOLD:
        return ACTIONS[ActionCode.OFFER_COUPON]
    elif score < config.REFERRAL_THRESHOLD:
        return ACTIONS[ActionCode.REQUEST_FEEDBACK]
    return ACTIONS[ActionCode.ASK_REFERRAL]


# --- Follow-up buttons shown under each action ---

SURVEY_URL = "https://forms.gle/g1KwfQmetxRGoHQy6"
TESTIMONIAL_URL = "https://example.com/testimonial-form"
REFERRAL_BASE_URL = "https://example.com/ref/"
COUPON_VALID_DAYS = 30

SUPPORT_CONFIRMATION = "Our support team will contact you within 24 hours."
CALL_CONFIRMATION = "Please check your email for scheduling options."


@dataclass(frozen=True)
class FollowUp:
    label: str
    kind: str  # coupon, support, survey, call, referral or testimonial
    icon: str
    url: Optional[str] = None


FOLLOW_UPS: Dict[ActionCode, List[FollowUp]] = {
    ActionCode.OFFER_COUPON: [
        FollowUp("Generate 50% Off Coupon", "coupon", "fa-tag"),
        FollowUp("Contact Support", "support", "fa-headset"),
    ],
    ActionCode.REQUEST_FEEDBACK: [
        FollowUp("Complete Survey", "survey", "fa-edit", url=SURVEY_URL),
        FollowUp("Schedule Call", "call", "fa-phone"),
    ],
    ActionCode.ASK_REFERRAL: [
        FollowUp("Share Referral Link", "referral", "fa-share-alt"),
        FollowUp("Write Testimonial", "testimonial", "fa-star", url=TESTIMONIAL_URL),
    ],
}


def follow_ups(action_code: ActionCode) -> List[FollowUp]:
    return list(FOLLOW_UPS[ActionCode(action_code)])


def generate_coupon_code(rng: Optional[random.Random] = None) -> str:
    """Return a one-off code such as SAVE50-K3Q9ZT."""
    rng = rng or random.Random()
    alphabet = string.ascii_uppercase + string.digits
    return "SAVE50-" + "".join(rng.choice(alphabet) for _ in range(6))


def referral_link(user_id: str) -> str:
    return REFERRAL_BASE_URL + user_id[:8]
