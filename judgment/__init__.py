"""
Assignment Judgment Module

Decides whether OCR text from a photographed homework page documents an
assignment for one of the user's registered courses, with a confidence
score and a human-readable reason.

Public API:
    normalize           - Canonicalize raw OCR text
    transliterate       - Apply only the full-width substitution table
    compact             - Lowercase and strip all whitespace
    judge               - Judge OCR text against registered courses
    AssignmentJudge     - Judge with an injectable keyword lexicon
    evaluate_submission - Normalize, judge and award points for one submission
    evaluate_batch      - Evaluate multiple submissions
    CourseDescriptor    - Registered course model
    JudgmentRecord      - Judgment result model
    SubmissionResult    - Submission result model
"""

from .engine import AssignmentJudge, judge
from .normalizer import compact, normalize, transliterate
from .schemas import CourseDescriptor, JudgmentRecord, SubmissionResult
from .submission import evaluate_batch, evaluate_submission

__all__ = [
    "normalize",
    "compact",
    "transliterate",
    "judge",
    "AssignmentJudge",
    "evaluate_submission",
    "evaluate_batch",
    "CourseDescriptor",
    "JudgmentRecord",
    "SubmissionResult",
]
