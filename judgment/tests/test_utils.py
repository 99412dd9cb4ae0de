"""
Tests for the judgment input boundary helpers.
"""

import json
from unittest.mock import patch

import pytest

from judgment.schemas import CourseDescriptor
from judgment.utils import (
    CourseDataError,
    JudgmentInputError,
    JudgmentSecurityError,
    load_courses,
    load_keyword_lexicon,
    load_text,
    parse_courses,
    sanitize_path,
)


class TestParseCourses:
    def test_parses_mappings(self):
        courses = parse_courses([{"name": "物理学", "instructor": "佐藤"}])
        assert courses == [CourseDescriptor(name="物理学", instructor="佐藤")]

    def test_ignores_extra_keys(self):
        courses = parse_courses(
            [
                {
                    "id": "course_abc",
                    "name": "物理学",
                    "instructor": "佐藤",
                    "color": "#3b82f6",
                    "createdAt": "2024-04-01T00:00:00Z",
                }
            ]
        )
        assert courses[0].id == "course_abc"
        assert courses[0].color == "#3b82f6"

    def test_passes_descriptors_through(self):
        course = CourseDescriptor(name="化学", instructor="鈴木")
        assert parse_courses([course])[0] is course

    def test_missing_instructor(self):
        with pytest.raises(CourseDataError):
            parse_courses([{"name": "物理学"}])

    def test_non_string_name(self):
        with pytest.raises(CourseDataError):
            parse_courses([{"name": 101, "instructor": "佐藤"}])

    def test_non_mapping_entry(self):
        with pytest.raises(CourseDataError, match="#1"):
            parse_courses([{"name": "a", "instructor": "b"}, "物理学"])

    def test_none(self):
        assert parse_courses(None) == []


class TestSanitizePath:
    def test_rejects_traversal(self):
        with pytest.raises(JudgmentSecurityError):
            sanitize_path("../etc/passwd")

    def test_missing_file(self, tmp_path):
        with pytest.raises(JudgmentInputError):
            sanitize_path(tmp_path / "missing.txt")

    def test_directory(self, tmp_path):
        with pytest.raises(JudgmentInputError):
            sanitize_path(tmp_path)

    def test_rejects_symlink(self, tmp_path):
        target = tmp_path / "page.txt"
        target.write_text("課題", encoding="utf-8")
        link = tmp_path / "link.txt"
        link.symlink_to(target)
        with pytest.raises(JudgmentSecurityError):
            sanitize_path(link)

    def test_rejects_oversized_file(self, tmp_path):
        path = tmp_path / "page.txt"
        path.write_text("課題", encoding="utf-8")
        with patch("judgment.config.MAX_INPUT_FILE_SIZE_MB", 0):
            with pytest.raises(JudgmentInputError, match="too large"):
                sanitize_path(path)


class TestLoadText:
    def test_reads_verbatim(self, tmp_path):
        path = tmp_path / "page.txt"
        path.write_text("  数学Ⅰ\n課題  ", encoding="utf-8")
        assert load_text(path) == "  数学Ⅰ\n課題  "

    def test_reads_stdin(self):
        with patch("sys.stdin") as stdin:
            stdin.buffer.read.return_value = "課題".encode("utf-8")
            assert load_text("-") == "課題"

    def test_rejects_oversized_stdin(self):
        with patch("sys.stdin") as stdin, patch("judgment.config.MAX_INPUT_FILE_SIZE_MB", 0):
            stdin.buffer.read.return_value = b"x"
            with pytest.raises(JudgmentInputError, match="too large"):
                load_text("-")
        stdin.buffer.read.assert_called_once_with(1)

    def test_rejects_invalid_utf8_stdin(self):
        with patch("sys.stdin") as stdin:
            stdin.buffer.read.return_value = b"\xff\xfe\xfa"
            with pytest.raises(JudgmentInputError):
                load_text("-")

    def test_rejects_invalid_utf8(self, tmp_path):
        path = tmp_path / "page.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(JudgmentInputError):
            load_text(path)


class TestLoadCourses:
    def test_loads_list(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text(
            json.dumps([{"name": "数学Ⅰ", "instructor": "田中先生"}], ensure_ascii=False),
            encoding="utf-8",
        )
        courses = load_courses(path)
        assert courses[0].name == "数学Ⅰ"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(JudgmentInputError, match="Invalid JSON"):
            load_courses(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text('{"name": "物理学"}', encoding="utf-8")
        with pytest.raises(JudgmentInputError, match="JSON list"):
            load_courses(path)

    def test_malformed_entry(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text('[{"name": "物理学"}]', encoding="utf-8")
        with pytest.raises(CourseDataError):
            load_courses(path)


class TestLoadKeywordLexicon:
    def test_skips_comments_and_blanks(self, tmp_path):
        path = tmp_path / "keywords.txt"
        path.write_text("# lexicon\n課題\n\n  quiz  \n課題\n", encoding="utf-8")
        assert load_keyword_lexicon(path) == ("課題", "quiz")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "keywords.txt"
        path.write_text("# nothing\n", encoding="utf-8")
        assert load_keyword_lexicon(path) == ()
