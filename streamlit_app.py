import logging

import pandas as pd
import plotly.express as px
import streamlit as st

import config
from business_logic import (
    ACTIONS,
    CALL_CONFIRMATION,
    COUPON_VALID_DAYS,
    SUPPORT_CONFIRMATION,
    follow_ups,
    generate_coupon_code,
    referral_link,
)
from errors import ReviewActionError
from identity import IdentityStore
from orchestrator import DEFAULT_USER_AGENT, AnalysisSession
from reviews import load_reviews
from sentiment_model import SENTIMENT_ICONS, SentimentClassifier
from telemetry import TelemetryEmitter, TelemetryQueue

logger = logging.getLogger(__name__)

ACTION_COLORS = {code.value: action.color_hint for code, action in ACTIONS.items()}


@st.cache_resource
def load_classifier(model_name: str) -> SentimentClassifier:
    """Load and cache the sentiment model across sessions."""
    classifier = SentimentClassifier(model_name=model_name)
    classifier.load()
    return classifier


@st.cache_resource
def get_telemetry_queue() -> TelemetryQueue:
    return TelemetryQueue(TelemetryEmitter())


@st.cache_data
def load_corpus(path: str):
    return load_reviews(path)


def init_session():
    """Build the analysis session once per browser session."""
    if st.session_state.get("session") is not None:
        return st.session_state.session

    for key in ("last_outcome", "error", "follow_up_message"):
        st.session_state.setdefault(key, None)

    try:
        reviews = load_corpus(config.REVIEWS_PATH)
    except ReviewActionError as e:
        logger.error(f"TSV load error: {e}")
        st.session_state.error = str(e)
        reviews = []

    with st.spinner("Loading sentiment model..."):
        classifier = load_classifier(config.MODEL_NAME)

    user_agent = st.context.headers.get("User-Agent", DEFAULT_USER_AGENT)
    st.session_state.session = AnalysisSession(
        reviews=reviews,
        classifier=classifier,
        telemetry=get_telemetry_queue(),
        user_id=IdentityStore().get_user_id(),
        model_name=config.MODEL_NAME,
        user_agent=user_agent,
    )
    return st.session_state.session


def show_status(session: AnalysisSession):
    if not session.classifier.ready:
        st.error(
            "Failed to load sentiment model. Please check your network connection and try again."
        )
    elif session.reviews:
        st.success(f"Sentiment model ready | Loaded {len(session.reviews)} reviews")
    else:
        st.warning("Sentiment model ready | No reviews loaded")


def run_analysis(session: AnalysisSession):
    st.session_state.error = None
    st.session_state.follow_up_message = None
    if not session.classifier.ready and not session.use_mock_fallback:
        st.session_state.error = "Sentiment model is not ready yet. Please wait a moment."
        return
    try:
        with st.spinner("Analyzing and determining action..."):
            st.session_state.last_outcome = session.analyze_random_review()
    except ReviewActionError as e:
        logger.error(f"Analysis failed: {e}")
        st.session_state.error = str(e) or "Failed to analyze sentiment."


def handle_follow_up(kind: str, session: AnalysisSession):
    if kind == "coupon":
        message = f"Your 50% discount coupon: {generate_coupon_code()} (valid for {COUPON_VALID_DAYS} days)"
    elif kind == "support":
        message = SUPPORT_CONFIRMATION
    elif kind == "call":
        message = CALL_CONFIRMATION
    elif kind == "referral":
        message = f"Share this link with friends: {referral_link(session.user_id)} - you both get 20% off!"
    else:
        return
    st.session_state.follow_up_message = message


def show_outcome(session: AnalysisSession):
    outcome = st.session_state.last_outcome
    if outcome is None:
        return

    st.subheader("📝 Review")
    st.info(outcome.review)

    st.subheader("🔍 Sentiment")
    icon = SENTIMENT_ICONS.get(outcome.bucket, SENTIMENT_ICONS["neutral"])
    st.markdown(f"### {icon} {outcome.summary}")
    if outcome.mocked:
        st.caption("Model unavailable, showing a simulated result.")

    action = outcome.action
    st.subheader("🎯 System Decision")
    st.markdown(
        f"<div class='{action.style_class}' style='color:{action.color_hint}; font-size:1.1rem;'>"
        f"{action.message}</div>",
        unsafe_allow_html=True,
    )

    cols = st.columns(2)
    for col, follow_up in zip(cols, follow_ups(action.action_code)):
        with col:
            if follow_up.url:
                st.link_button(follow_up.label, follow_up.url, width="stretch")
            elif st.button(follow_up.label, key=f"follow-up-{follow_up.kind}", width="stretch"):
                handle_follow_up(follow_up.kind, session)

    if st.session_state.follow_up_message:
        st.success(st.session_state.follow_up_message)


def show_history(session: AnalysisSession):
    counts = session.action_counts()
    if not counts:
        return
    with st.expander("📊 Actions taken this session"):
        df = pd.DataFrame({"Action": list(counts.keys()), "Count": list(counts.values())})
        fig = px.bar(
            df,
            x="Action",
            y="Count",
            color="Action",
            color_discrete_map=ACTION_COLORS,
            text_auto=True,
            height=350,
        )
        st.plotly_chart(fig, width="stretch")


# --- Streamlit UI ---
config.setup_logging()
st.set_page_config(page_title="Review Sentiment Actions", layout="centered")
st.title("🎬 Review Sentiment & Business Actions")
st.markdown("Pick a random movie review, classify its sentiment and see which action the system takes.")

session = init_session()
show_status(session)

if st.button("▶️ Analyze Random Review", type="primary"):
    run_analysis(session)

if st.session_state.error:
    st.error(st.session_state.error)
    if st.button("Dismiss"):
        st.session_state.error = None
        st.rerun()

show_outcome(session)
show_history(session)
