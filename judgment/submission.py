"""
submission.py

Main orchestrator for judging submitted assignment photos.

Coordinates the flow for text already extracted by the OCR service:
normalization -> judgment -> point award. Supports single submissions
and batches, the latter optionally on a thread pool.
"""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from . import config
from .engine import CourseInput, judge
from .normalizer import normalize
from .schemas import CourseDescriptor, JudgmentRecord, SubmissionResult
from .utils import parse_courses

logger = logging.getLogger(__name__)

SubmissionInput = Union[str, Tuple[str, str]]


def _new_submission_id() -> str:
    return str(uuid.uuid4())[:8]


def evaluate_submission(
    detected_text: Optional[str],
    registered_courses: Optional[Sequence[CourseInput]] = None,
    submission_id: Optional[str] = None,
    keywords: Optional[Iterable[str]] = None,
) -> SubmissionResult:
    """
    Judge one submission and decide how many points it earns.

    Args:
        detected_text: Raw text returned by the OCR service.
        registered_courses: The submitting user's registered courses.
        submission_id: Optional identifier. Auto-generated if not provided.
        keywords: Optional replacement keyword lexicon.

    Returns:
        SubmissionResult holding the judgment and the awarded points.
    """
    if submission_id is None:
        submission_id = _new_submission_id()

    detected_text = detected_text or ""
    courses = parse_courses(registered_courses or ())

    logger.info(
        "Evaluating submission %s (%d chars, %d courses)",
        submission_id,
        len(detected_text),
        len(courses),
    )

    warnings: List[str] = []
    if not detected_text.strip():
        warnings.append("No text was detected in the submitted image")
    if not courses:
        warnings.append("No registered courses to match against")

    normalized_text = normalize(detected_text)
    judgment = judge(detected_text, normalized_text, courses, keywords=keywords)

    points = config.POINTS_PER_VALID_SUBMISSION if judgment.is_valid else 0

    logger.info(
        "Submission %s: valid=%s confidence=%d points=%d",
        submission_id,
        judgment.is_valid,
        judgment.confidence,
        points,
    )

    return SubmissionResult(
        submission_id=submission_id,
        judgment=judgment,
        normalized_text=normalized_text,
        points_awarded=points,
        warnings=warnings,
    )


def evaluate_batch(
    submissions: Sequence[SubmissionInput],
    registered_courses: Optional[Sequence[CourseInput]] = None,
    max_workers: Optional[int] = None,
    keywords: Optional[Iterable[str]] = None,
) -> List[SubmissionResult]:
    """
    Evaluate multiple submissions against the same course list.

    Args:
        submissions: Raw OCR texts, or (submission_id, text) pairs.
        registered_courses: The submitting user's registered courses.
        max_workers: Number of concurrent workers. Defaults to config.BATCH_WORKERS.
        keywords: Optional replacement keyword lexicon.

    Returns:
        One SubmissionResult per input, in input order. A submission
        that fails is reported as invalid with zero points and a warning.
    """
    if max_workers is None:
        max_workers = config.BATCH_WORKERS

    courses = parse_courses(registered_courses or ())
    if keywords is not None:
        keywords = tuple(keywords)

    entries = list(submissions)
    results: Dict[int, SubmissionResult] = {}

    # For single item or small batches, process sequentially
    if len(entries) <= 1 or max_workers <= 1:
        for index, entry in enumerate(entries):
            results[index] = _evaluate_safely(entry, courses, keywords)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(_evaluate_safely, entry, courses, keywords): index
                for index, entry in enumerate(entries)
            }
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()

    logger.info(
        "Batch evaluated: %d submissions, %d valid",
        len(results),
        sum(1 for r in results.values() if r.judgment.is_valid),
    )

    return [results[index] for index in range(len(entries))]


def _unpack(entry: SubmissionInput) -> Tuple[str, str]:
    if isinstance(entry, tuple):
        sub_id, text = entry
        return sub_id, text
    return _new_submission_id(), entry


def _fallback_id(entry: SubmissionInput) -> str:
    if isinstance(entry, tuple) and entry:
        return str(entry[0])
    return _new_submission_id()


def _evaluate_safely(
    entry: SubmissionInput,
    courses: List[CourseDescriptor],
    keywords: Optional[Iterable[str]],
) -> SubmissionResult:
    submission_id = None
    detected_text = ""
    try:
        submission_id, detected_text = _unpack(entry)
        return evaluate_submission(
            detected_text, courses, submission_id=submission_id, keywords=keywords
        )
    except Exception as e:
        if not isinstance(submission_id, str):
            submission_id = _fallback_id(entry)
        logger.error("Failed to evaluate submission %s: %s", submission_id, e)
        return SubmissionResult(
            submission_id=submission_id,
            judgment=JudgmentRecord(
                is_valid=False,
                confidence=0,
                detected_text=detected_text if isinstance(detected_text, str) else "",
                reason=f"判定処理に失敗しました: {e}",
            ),
            normalized_text="",
            points_awarded=0,
            warnings=[f"Processing failed: {str(e)}"],
        )
