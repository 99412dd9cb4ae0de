"""
schemas.py

Pydantic models shared across the judgment module.

- CourseDescriptor: a registered course as supplied by the caller
- JudgmentRecord:   the outcome of judging one piece of OCR text
- SubmissionResult: a judgment plus the submission workflow's decisions
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from . import config


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CourseDescriptor(BaseModel):
    """
    A registered course. Only name and instructor take part in matching.

    Both must contain non-whitespace text; a blank field would be a
    substring of every page.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    instructor: str
    id: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name", "instructor")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class JudgmentRecord(BaseModel):
    """
    Result of judging whether OCR text documents a registered assignment.

    Serializes with camelCase keys (isValid, matchedCourses, ...) so the
    record can be handed to the display layer unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    is_valid: bool
    confidence: int = Field(ge=0, le=config.MAX_CONFIDENCE)
    detected_text: str
    matched_courses: Tuple[str, ...] = ()
    keyword_matches: int = Field(default=0, ge=0)
    reason: str
    timestamp: datetime = Field(default_factory=_utcnow)

    @property
    def confidence_level(self) -> str:
        if self.confidence >= config.HIGH_CONFIDENCE_THRESHOLD:
            return "high"
        if self.confidence >= config.MEDIUM_CONFIDENCE_THRESHOLD:
            return "medium"
        return "low"

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class SubmissionResult(BaseModel):
    """Judgment of one submitted page and the points it earned."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    submission_id: str
    judgment: JudgmentRecord
    normalized_text: str = ""
    points_awarded: int = Field(default=0, ge=0)
    warnings: List[str] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
