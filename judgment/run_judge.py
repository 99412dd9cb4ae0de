"""
run_judge.py

Simple CLI script to judge OCR text from a submitted assignment photo.

Usage:
    python -m judgment.run_judge <text_path> --courses courses.json
    python -m judgment.run_judge - --courses courses.json --json < page.txt
    python -m judgment.run_judge <text_path> --courses courses.json --keywords terms.txt

Exit status is 0 for a valid assignment, 2 for an invalid one and 1 when
the input could not be read.
"""

import argparse
import json
import logging
import sys

from .submission import evaluate_submission
from .utils import (
    JudgmentInputError,
    JudgmentSecurityError,
    load_courses,
    load_keyword_lexicon,
    load_text,
)

EXIT_VALID = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Judge whether OCR text documents a registered course assignment"
    )
    parser.add_argument(
        "text_path",
        help="Path to a UTF-8 file holding the OCR text, or '-' for stdin",
    )
    parser.add_argument(
        "--courses",
        required=True,
        help="Path to a JSON list of registered courses ({name, instructor})",
    )
    parser.add_argument(
        "--keywords",
        default=None,
        help="Optional keyword lexicon file (one term per line)",
    )
    parser.add_argument(
        "--submission-id",
        default=None,
        help="Custom submission ID (auto-generated if not provided)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output full structured result as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        text = load_text(args.text_path)
        courses = load_courses(args.courses)
        keywords = load_keyword_lexicon(args.keywords) if args.keywords else None
    except (JudgmentInputError, JudgmentSecurityError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    result = evaluate_submission(
        text, courses, submission_id=args.submission_id, keywords=keywords
    )
    judgment = result.judgment

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(f"Submission: {result.submission_id}")
        print(f"Valid: {'yes' if judgment.is_valid else 'no'}")
        print(f"Confidence: {judgment.confidence}% ({judgment.confidence_level})")
        if judgment.matched_courses:
            print(f"Matched courses: {', '.join(judgment.matched_courses)}")
        print(f"Points: {result.points_awarded}")
        for warning in result.warnings:
            print(f"Warning: {warning}")
        print("---")
        print(judgment.reason)

    return EXIT_VALID if judgment.is_valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
