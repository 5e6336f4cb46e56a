# services/lessons.py
from __future__ import annotations
import logging
from typing import List, Optional

from typemaster.app.models import Difficulty, Lesson
from typemaster.utils.db_helper import DB_PATH, fetch_lessons, insert_lessons
from typemaster.utils.file_handler import load_lessons_file

logger = logging.getLogger(__name__)

ALL = "all"


class LessonCatalog:
    """Read-only lesson source, seeded from the bundled lessons file on first use."""

    def __init__(self, db_path: str = DB_PATH, seed_file: Optional[str] = None):
        self.db_path = db_path
        self.seed_file = seed_file
        self._lessons: Optional[List[Lesson]] = None

    def load(self) -> List[Lesson]:
        lessons = fetch_lessons(self.db_path)
        if not lessons and self.seed_file:
            seeded = insert_lessons(load_lessons_file(self.seed_file), self.db_path)
            logger.info("Seeded %d lessons from %s", seeded, self.seed_file)
            lessons = fetch_lessons(self.db_path)
        self._lessons = sorted(lessons, key=lambda l: (l.difficulty.rank, l.title.lower()))
        return self._lessons

    def lessons(self, difficulty=ALL) -> List[Lesson]:
        """Lessons ordered by difficulty; `difficulty` is "all" or a Difficulty."""
        if self._lessons is None:
            self.load()
        if difficulty == ALL or difficulty is None:
            return list(self._lessons)
        wanted = Difficulty.parse(difficulty)
        return [l for l in self._lessons if l.difficulty is wanted]

    def get(self, lesson_id: str) -> Optional[Lesson]:
        for lesson in self.lessons():
            if lesson.id == lesson_id:
                return lesson
        return None
