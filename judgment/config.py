"""
config.py

Configuration module for the assignment judgment engine.

Purpose:
--------
Contains all scoring weights, classification thresholds, the default
keyword lexicon, and the limits applied to caller-supplied input files.

Design Principle:
-----------------
Configuration is isolated from business logic.
Changing weights or swapping the lexicon should not require
editing core judgment code.
"""

# -----------------------------
# Course matching
# -----------------------------
COURSE_MATCH_SCORE = 30
NORMALIZED_MATCH_BONUS = 10

# -----------------------------
# Keyword matching
# -----------------------------
KEYWORD_MATCH_SCORE = 10
ASSIGNMENT_KEYWORDS = (
    "課題",
    "宿題",
    "レポート",
    "提出",
    "assignment",
    "homework",
    "report",
    "exercise",
    "問題",
    "解答",
    "回答",
    "テスト",
    "試験",
)

# -----------------------------
# Classification
# -----------------------------
MAX_CONFIDENCE = 100
VALID_CONFIDENCE_THRESHOLD = 40
VALID_KEYWORD_THRESHOLD = 2

# Display bands for the confidence meter
HIGH_CONFIDENCE_THRESHOLD = 70
MEDIUM_CONFIDENCE_THRESHOLD = 40

# -----------------------------
# Rewards
# -----------------------------
POINTS_PER_VALID_SUBMISSION = 10

# -----------------------------
# Security
# -----------------------------
MAX_INPUT_FILE_SIZE_MB = 5

# -----------------------------
# Performance
# -----------------------------
BATCH_WORKERS = 4
