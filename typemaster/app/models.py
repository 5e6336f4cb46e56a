# app/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from typemaster.app.errors import LessonError


class Difficulty(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return _DIFFICULTY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value) -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise LessonError(f"Unknown difficulty: {value!r}") from None


_DIFFICULTY_ORDER = [Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED]


@dataclass(frozen=True)
class Lesson:
    id: str
    title: str
    content: str
    difficulty: Difficulty
    category: str = "general"
    created_at: str = ""

    def __post_init__(self):
        if not self.content:
            raise LessonError(f"Lesson {self.id!r} has no content")

    @property
    def length(self) -> int:
        return len(self.content)

    def preview(self, limit: int = 80) -> str:
        if len(self.content) <= limit:
            return self.content
        return self.content[:limit] + "..."

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Lesson":
        required = {"id", "title", "content", "difficulty"}
        missing = required - set(d.keys())
        if missing:
            raise LessonError(f"Missing lesson keys: {', '.join(sorted(missing))}")
        return cls(
            id=str(d["id"]),
            title=str(d["title"]),
            content=str(d["content"]),
            difficulty=Difficulty.parse(d["difficulty"]),
            category=str(d.get("category") or "general"),
            created_at=str(d.get("created_at") or ""),
        )


@dataclass(frozen=True)
class Identity:
    """The signed-in user. Absence (None) means guest mode."""
    id: int
    username: str


@dataclass(frozen=True)
class SessionPayload:
    """One completed attempt, as handed to the persistence store."""
    user_id: int
    lesson_id: str
    wpm: int
    accuracy: int
    time_taken: int
    completed: bool = True


@dataclass(frozen=True)
class SessionRecord:
    id: int
    user_id: int
    lesson_id: str
    wpm: int
    accuracy: int
    time_taken: int
    completed: bool
    created_at: str
    lesson_title: str = ""
    lesson_difficulty: Optional[Difficulty] = None
