import json

import pytest

from typemaster.app.config import DEFAULT_LESSONS_FILE
from typemaster.app.errors import LessonError
from typemaster.app.models import Difficulty, Lesson
from typemaster.services.lessons import ALL, LessonCatalog
from typemaster.utils.file_handler import load_lessons_file


def test_bundled_lessons_file_is_valid() -> None:
    lessons = load_lessons_file(DEFAULT_LESSONS_FILE)
    assert lessons
    assert {l.difficulty for l in lessons} == set(Difficulty)
    assert len({l.id for l in lessons}) == len(lessons)


def test_catalog_seeds_once_and_orders_by_difficulty(db_path) -> None:
    catalog = LessonCatalog(db_path, seed_file=str(DEFAULT_LESSONS_FILE))
    lessons = catalog.load()
    ranks = [l.difficulty.rank for l in lessons]
    assert ranks == sorted(ranks)

    again = LessonCatalog(db_path, seed_file=str(DEFAULT_LESSONS_FILE)).load()
    assert [l.id for l in again] == [l.id for l in lessons]


def test_catalog_filters_by_difficulty(db_path) -> None:
    catalog = LessonCatalog(db_path, seed_file=str(DEFAULT_LESSONS_FILE))
    everything = catalog.lessons(ALL)
    advanced = catalog.lessons(Difficulty.ADVANCED)
    assert advanced
    assert all(l.difficulty is Difficulty.ADVANCED for l in advanced)
    assert catalog.lessons("beginner") == [l for l in everything if l.difficulty is Difficulty.BEGINNER]


def test_catalog_get(db_path) -> None:
    catalog = LessonCatalog(db_path, seed_file=str(DEFAULT_LESSONS_FILE))
    assert catalog.get("quick-brown-fox").title == "The Quick Brown Fox"
    assert catalog.get("missing") is None


def test_catalog_without_seed_is_empty(db_path) -> None:
    assert LessonCatalog(db_path).lessons() == []


def test_invalid_entries_are_skipped(tmp_path) -> None:
    path = tmp_path / "lessons.json"
    path.write_text(
        json.dumps(
            [
                {"id": "ok", "title": "Ok", "content": "fine", "difficulty": "beginner"},
                {"id": "empty", "title": "Empty", "content": "", "difficulty": "beginner"},
                {"id": "odd", "title": "Odd", "content": "x", "difficulty": "expert"},
                "not a lesson",
            ]
        ),
        encoding="utf-8",
    )
    assert [l.id for l in load_lessons_file(path)] == ["ok"]


def test_unreadable_lessons_file(tmp_path) -> None:
    path = tmp_path / "lessons.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LessonError):
        load_lessons_file(path)
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(LessonError):
        load_lessons_file(path)


def test_lesson_preview_and_difficulty_parsing() -> None:
    lesson = Lesson(id="l", title="L", content="x" * 100, difficulty=Difficulty.parse(" Advanced "))
    assert lesson.difficulty is Difficulty.ADVANCED
    assert lesson.preview() == "x" * 80 + "..."
    assert lesson.length == 100
    with pytest.raises(LessonError):
        Difficulty.parse("expert")
