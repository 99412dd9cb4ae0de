"""
engine.py

Rule-based assignment judgment.

Decides whether OCR text from a photographed homework page documents an
assignment for one of the user's registered courses:

1. Course matching: course name or instructor found in the text
2. Keyword matching: assignment vocabulary found in the text
3. Scoring: accumulated confidence, clamped to 100
4. Classification and a human-readable reason

Matching is plain substring containment, not edit-distance fuzzy matching.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from . import config
from .normalizer import compact
from .schemas import CourseDescriptor, JudgmentRecord
from .utils import parse_courses

logger = logging.getLogger(__name__)

CourseInput = Union[CourseDescriptor, Mapping[str, Any]]

REASON_VALID = "登録済みの講義「{courses}」が検出されました。"
REASON_KEYWORDS = " また、課題関連のキーワードが{count}個見つかりました。"
REASON_NO_COURSE = "登録済みの講義名が画像内で検出されませんでした。"
REASON_INSUFFICIENT = "講義名は検出されましたが、課題関連のキーワードが不足しています。"
REASON_NO_REGISTRATION = " まず講義を登録してください。"
COURSE_SEPARATOR = "、"


class AssignmentJudge:
    """
    Judges OCR text against registered courses and a keyword lexicon.

    The lexicon is fixed at construction; instances hold no other state
    and can be shared between threads.
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        if keywords is None:
            keywords = config.ASSIGNMENT_KEYWORDS

        lexicon: List[str] = []
        for keyword in keywords:
            term = keyword.lower()
            if term and term not in lexicon:
                lexicon.append(term)
        self._keywords: Tuple[str, ...] = tuple(lexicon)

    @property
    def keywords(self) -> Tuple[str, ...]:
        return self._keywords

    def judge(
        self,
        detected_text: Optional[str],
        normalized_text: Optional[str] = None,
        registered_courses: Optional[Sequence[CourseInput]] = None,
    ) -> JudgmentRecord:
        """
        Judge whether the text documents a registered course assignment.

        Args:
            detected_text: Raw OCR text, kept verbatim on the record.
            normalized_text: Output of normalizer.normalize(detected_text).
                When None, a lowercase/whitespace-stripped form of
                detected_text is used instead. That fallback skips the
                full-width substitutions, so callers should always pass
                the normalized text. An empty string is kept for the
                keyword scan, but course matching uses the fallback.
            registered_courses: The user's courses, in display order.

        Returns:
            A new JudgmentRecord.
        """
        detected_text = detected_text or ""
        courses = parse_courses(registered_courses or ())

        fallback_text = compact(detected_text)
        if normalized_text is None:
            logger.debug("No normalized text supplied, using compact fallback")
            normalized_text = fallback_text

        # An empty normalized text falls back to the compact form for course matching
        haystack = compact(normalized_text) if normalized_text else fallback_text

        matched_courses, course_score = self._match_courses(
            detected_text, haystack, courses
        )
        keyword_matches = self._count_keywords(normalized_text)

        raw_confidence = course_score + keyword_matches * config.KEYWORD_MATCH_SCORE
        confidence = min(raw_confidence, config.MAX_CONFIDENCE)

        is_valid = bool(matched_courses) and (
            confidence >= config.VALID_CONFIDENCE_THRESHOLD
            or keyword_matches >= config.VALID_KEYWORD_THRESHOLD
        )

        reason = build_reason(
            is_valid, matched_courses, keyword_matches, has_courses=bool(courses)
        )

        logger.info(
            "Judgment: valid=%s confidence=%d (raw=%d) courses=%d keywords=%d",
            is_valid,
            confidence,
            raw_confidence,
            len(matched_courses),
            keyword_matches,
        )

        return JudgmentRecord(
            is_valid=is_valid,
            confidence=confidence,
            detected_text=detected_text,
            matched_courses=tuple(matched_courses),
            keyword_matches=keyword_matches,
            reason=reason,
        )

    def _match_courses(
        self,
        detected_text: str,
        haystack: str,
        courses: List[CourseDescriptor],
    ) -> Tuple[List[str], int]:
        matched: List[str] = []
        score = 0

        for course in courses:
            matches_normalized = (
                compact(course.name) in haystack
                or compact(course.instructor) in haystack
            )
            matches_original = (
                course.name in detected_text or course.instructor in detected_text
            )

            if not (matches_normalized or matches_original):
                continue

            matched.append(course.name)
            score += config.COURSE_MATCH_SCORE
            if matches_normalized:
                score += config.NORMALIZED_MATCH_BONUS

            logger.debug(
                "Course matched: '%s' (normalized=%s, original=%s)",
                course.name,
                matches_normalized,
                matches_original,
            )

        return matched, score

    def _count_keywords(self, text: str) -> int:
        return sum(1 for keyword in self._keywords if keyword in text)


def build_reason(
    is_valid: bool,
    matched_courses: Sequence[str],
    keyword_matches: int,
    has_courses: bool = True,
) -> str:
    """Assemble the user-facing explanation for a judgment."""
    if is_valid:
        reason = REASON_VALID.format(courses=COURSE_SEPARATOR.join(matched_courses))
        if keyword_matches > 0:
            reason += REASON_KEYWORDS.format(count=keyword_matches)
    elif not matched_courses:
        reason = REASON_NO_COURSE
    else:
        reason = REASON_INSUFFICIENT

    if not has_courses:
        reason += REASON_NO_REGISTRATION

    return reason


_default_judge = AssignmentJudge()


def judge(
    detected_text: Optional[str],
    normalized_text: Optional[str] = None,
    registered_courses: Optional[Sequence[CourseInput]] = None,
    keywords: Optional[Iterable[str]] = None,
) -> JudgmentRecord:
    """
    Judge OCR text with the default lexicon, or with `keywords` if given.

    See AssignmentJudge.judge for the argument contract.
    """
    judge_ = _default_judge if keywords is None else AssignmentJudge(keywords)
    return judge_.judge(detected_text, normalized_text, registered_courses)
