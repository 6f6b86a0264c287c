"""Centralized constants for the Leitner scheduler.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Buckets ----------
NEW_CARD_BUCKET = 0
DEFAULT_RETIRED_BUCKET = 5

# ---------- Progress Insights ----------
MAX_DIFFICULT_CARDS = 5
IMPROVEMENT_WINDOW_DAYS = 7

# ---------- Hints ----------
HINT_MASK_CHAR = "_"
