"""
Configuration for the review action demo.

Values can be overridden through environment variables or a local .env file.
"""

import logging
import os
import sys
from pathlib import Path

import torch
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Model
MODEL_NAME = os.getenv("MODEL_NAME", "distilbert-base-uncased-finetuned-sst-2-english")
DEVICE = 0 if torch.cuda.is_available() else -1
BATCH_SIZE = 32

# Substitute a random result when the classifier fails (legacy demo behaviour)
USE_MOCK_FALLBACK = _env_bool("USE_MOCK_FALLBACK", False)

# Corpus and local identity
REVIEWS_PATH = os.getenv("REVIEWS_PATH", "reviews_test.tsv")
IDENTITY_PATH = Path(os.getenv("IDENTITY_PATH", Path.home() / ".review_actions" / "identity.json"))
IDENTITY_KEY = "sa_uid"

# Telemetry (Google Apps Script web app backed by a spreadsheet)
TELEMETRY_URL = os.getenv(
    "TELEMETRY_URL",
    "https://script.google.com/macros/s/AKfycbxe8UyJXOFRTSadcCOvOVjaFMpLKnb9wHLc9QqapiR08clgfWui14EixT_sRthslZxT/exec",
)
TELEMETRY_TIMEOUT_SECONDS = float(os.getenv("TELEMETRY_TIMEOUT_SECONDS", "10"))
TELEMETRY_QUEUE_SIZE = int(os.getenv("TELEMETRY_QUEUE_SIZE", "100"))
MAX_REVIEW_CHARS = 5000

# Decision thresholds on the normalized score (0 = worst, 1 = best)
COUPON_THRESHOLD = 0.40
REFERRAL_THRESHOLD = 0.70

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = LOG_LEVEL):
    """Configure logging for the whole application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
