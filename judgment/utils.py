"""
utils.py

Input boundary helpers for the judgment module.

Handles:
- Coercion of raw course payloads into CourseDescriptor records
- File path sanitization against path traversal
- File size enforcement
- Loading OCR text, course lists and keyword lexicons from disk
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple, Union

from pydantic import ValidationError

from . import config
from .schemas import CourseDescriptor

logger = logging.getLogger(__name__)


class JudgmentInputError(Exception):
    """Raised when caller-supplied input cannot be read or parsed."""

    pass


class CourseDataError(JudgmentInputError):
    """Raised when a course payload is missing required fields."""

    pass


class JudgmentSecurityError(Exception):
    """Raised when a security check fails (e.g., path traversal)."""

    pass


def parse_courses(
    courses: Iterable[Union[CourseDescriptor, Mapping[str, Any]]],
) -> List[CourseDescriptor]:
    """
    Coerce a sequence of courses into CourseDescriptor records.

    Already-built descriptors are passed through. Mappings are validated:
    "name" and "instructor" must be present, non-blank strings; other
    keys are ignored.

    Raises:
        CourseDataError: If any entry is malformed.
    """
    if courses is None:
        return []

    parsed: List[CourseDescriptor] = []
    for index, course in enumerate(courses):
        if isinstance(course, CourseDescriptor):
            parsed.append(course)
            continue
        if not isinstance(course, Mapping):
            raise CourseDataError(
                f"Course #{index} must be a mapping, got {type(course).__name__}"
            )
        try:
            parsed.append(CourseDescriptor.model_validate(dict(course)))
        except ValidationError as e:
            raise CourseDataError(f"Invalid course #{index}: {e}") from e

    return parsed


def sanitize_path(file_path: Union[str, Path]) -> Path:
    """
    Validate and sanitize an input file path.

    Raises:
        JudgmentSecurityError: If path traversal or a symlink is detected.
        JudgmentInputError: If the file does not exist or is not a file.
    """
    raw = str(file_path)
    if ".." in Path(raw).parts:
        raise JudgmentSecurityError(f"Path traversal detected in: {raw}")

    path = Path(file_path)
    if path.is_symlink():
        raise JudgmentSecurityError(f"Symlinks are not allowed: {path}")

    path = path.resolve()
    if not path.exists():
        raise JudgmentInputError(f"File not found: {path}")

    if not path.is_file():
        raise JudgmentInputError(f"Not a regular file: {path}")

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > config.MAX_INPUT_FILE_SIZE_MB:
        raise JudgmentInputError(
            f"File too large: {size_mb:.1f}MB exceeds "
            f"limit of {config.MAX_INPUT_FILE_SIZE_MB}MB"
        )

    return path


def _read_text(file_path: Union[str, Path]) -> str:
    path = sanitize_path(file_path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise JudgmentInputError(f"Failed to read {path.name}: {e}") from e


def _read_stdin() -> str:
    limit = config.MAX_INPUT_FILE_SIZE_MB * 1024 * 1024
    data = sys.stdin.buffer.read(limit + 1)
    if len(data) > limit:
        raise JudgmentInputError(
            f"Input too large: stdin exceeds "
            f"limit of {config.MAX_INPUT_FILE_SIZE_MB}MB"
        )
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise JudgmentInputError(f"Failed to read stdin: {e}") from e


def load_text(file_path: Union[str, Path]) -> str:
    """
    Load OCR text from a file, or from stdin when file_path is "-".

    The text is returned verbatim; no normalization is applied.
    """
    if str(file_path) == "-":
        return _read_stdin()

    text = _read_text(file_path)
    logger.info("Loaded %d characters of OCR text from %s", len(text), file_path)
    return text


def load_courses(file_path: Union[str, Path]) -> List[CourseDescriptor]:
    """
    Load registered courses from a JSON file containing a list of objects.

    Raises:
        JudgmentInputError: If the file is not valid JSON or not a list.
        CourseDataError: If an entry is malformed.
    """
    raw = _read_text(file_path)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise JudgmentInputError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, list):
        raise JudgmentInputError(
            f"Expected a JSON list of courses in {file_path}, "
            f"got {type(data).__name__}"
        )

    courses = parse_courses(data)
    logger.info("Loaded %d registered course(s) from %s", len(courses), file_path)
    return courses


def load_keyword_lexicon(file_path: Union[str, Path]) -> Tuple[str, ...]:
    """
    Load a keyword lexicon: one term per line, blank lines and
    lines starting with '#' are skipped. Order is preserved.
    """
    raw = _read_text(file_path)

    keywords: List[str] = []
    for line in raw.splitlines():
        word = line.strip()
        if word and not word.startswith("#") and word not in keywords:
            keywords.append(word)

    if not keywords:
        logger.warning("Keyword lexicon %s is empty", file_path)

    logger.info("Loaded %d keyword(s) from %s", len(keywords), file_path)
    return tuple(keywords)
