from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math


@dataclass(frozen=True)
class SessionMetrics:
    wpm: int = 0
    accuracy: int = 0
    elapsed_seconds: int = 0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def words_typed(user_input: str) -> int:
    # str.split() with no separator trims and collapses whitespace runs
    return len(user_input.split())


def compute_wpm(user_input: str, elapsed_ms: float) -> int:
    """
    Words per minute over what was typed, not over the lesson's words.
    Anything that is not a finite positive rate (not started, zero duration,
    nothing typed) reports 0.
    """
    minutes = elapsed_ms / 60000.0
    if not minutes > 0:
        return 0
    raw = words_typed(user_input) / minutes
    if not math.isfinite(raw) or raw <= 0:
        return 0
    return round_half_up(raw)


def correct_chars(target_text: str, user_input: str) -> int:
    return sum(1 for i, ch in enumerate(user_input)
               if i < len(target_text) and ch == target_text[i])


def compute_accuracy(target_text: str, user_input: str) -> int:
    """
    Correct characters as a share of the whole target, 0..100.

    Unlike a plain round(correct / total * 100), a result that is not fully
    correct is capped at 99, so 199 of 200 reports 99 rather than 100.
    """
    total = len(target_text)
    if total == 0:
        return 0
    correct = correct_chars(target_text, user_input)
    acc = round_half_up(correct / total * 100)
    if correct < total:
        acc = min(acc, 99)
    return max(0, min(100, acc))


def elapsed_seconds(elapsed_ms: float) -> int:
    return max(0, round_half_up(elapsed_ms / 1000.0))


def calculate(target_text: str, user_input: str, elapsed_ms: float) -> SessionMetrics:
    return SessionMetrics(
        wpm=compute_wpm(user_input, elapsed_ms),
        accuracy=compute_accuracy(target_text, user_input),
        elapsed_seconds=elapsed_seconds(elapsed_ms),
    )


def format_clock(elapsed_ms: float) -> str:
    """m:ss for the live timer label."""
    seconds = int(max(0.0, elapsed_ms) // 1000)
    minutes, rest = divmod(seconds, 60)
    return f"{minutes}:{rest:02d}"


def smooth(values: List[float], factor: float = 0.25) -> List[float]:
    out, last = [], None
    for v in values:
        last = v if last is None else last + factor * (v - last)
        out.append(last)
    return out
