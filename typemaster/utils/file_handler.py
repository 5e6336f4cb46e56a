import json, os
import logging
from pathlib import Path
from typing import List

from typemaster.app.errors import LessonError
from typemaster.app.models import Lesson

logger = logging.getLogger(__name__)


def ensure_app_files(db_path: str):
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)


def load_lessons_file(path) -> List[Lesson]:
    """
    Read seed lessons from a JSON list. Entries that do not describe a valid
    lesson are skipped and logged.
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise LessonError(f"Cannot read lessons from {p}: {e}") from e
    if not isinstance(data, list):
        raise LessonError(f"{p} must contain a JSON list of lessons")

    lessons = []
    for item in data:
        try:
            lessons.append(Lesson.from_dict(item))
        except (LessonError, AttributeError) as e:
            logger.warning("Skipping lesson entry in %s: %s", p, e)
    return lessons
