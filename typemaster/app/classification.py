# app/classification.py
from __future__ import annotations
from collections.abc import Sequence
from enum import Enum
from typing import Iterator


class CharState(Enum):
    UNTYPED = "untyped"
    CURRENT = "current"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def classify_at(target_text: str, user_input: str, index: int) -> CharState:
    typed = len(user_input)
    if index < typed:
        if user_input[index] == target_text[index]:
            return CharState.CORRECT
        return CharState.INCORRECT
    if index == typed:
        return CharState.CURRENT
    return CharState.UNTYPED


def iter_char_states(target_text: str, user_input: str) -> Iterator[CharState]:
    for i in range(len(target_text)):
        yield classify_at(target_text, user_input, i)


class CharFeedback(Sequence):
    """
    Per-character states of the target text for one (target, input) pair.
    Nothing is cached; every iteration walks the text again.
    """

    def __init__(self, target_text: str, user_input: str):
        self.target_text = target_text
        self.user_input = user_input

    def __len__(self) -> int:
        return len(self.target_text)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("character index out of range")
        return classify_at(self.target_text, self.user_input, index)

    def __iter__(self) -> Iterator[CharState]:
        return iter_char_states(self.target_text, self.user_input)

    def pairs(self) -> Iterator[tuple[str, CharState]]:
        """(character, state) pairs, the shape renderers want."""
        return zip(self.target_text, iter(self))
