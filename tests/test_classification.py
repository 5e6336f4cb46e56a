from typemaster.app.classification import CharFeedback, CharState, classify_at, iter_char_states


def test_nothing_typed_marks_first_as_cursor() -> None:
    states = list(CharFeedback("hello world", ""))
    assert states[0] is CharState.CURRENT
    assert all(s is CharState.UNTYPED for s in states[1:])
    assert len(states) == 11


def test_mixed_progress() -> None:
    states = list(iter_char_states("cat!", "cb"))
    assert states == [CharState.CORRECT, CharState.INCORRECT, CharState.CURRENT, CharState.UNTYPED]


def test_complete_input_has_no_cursor() -> None:
    states = list(CharFeedback("cat", "cat"))
    assert CharState.CURRENT not in states
    assert states == [CharState.CORRECT] * 3


def test_exactly_one_cursor_while_typing() -> None:
    target = "typing practice"
    for n in range(len(target)):
        states = list(CharFeedback(target, target[:n]))
        assert states.count(CharState.CURRENT) == 1
        assert states[n] is CharState.CURRENT


def test_feedback_is_restartable() -> None:
    fb = CharFeedback("abc", "ax")
    assert list(fb) == list(fb)


def test_indexing_and_pairs() -> None:
    fb = CharFeedback("abc", "ax")
    assert fb[-1] is CharState.CURRENT
    assert fb[0:2] == [CharState.CORRECT, CharState.INCORRECT]
    assert list(fb.pairs())[1] == ("b", CharState.INCORRECT)
    assert classify_at("abc", "ax", 2) is CharState.CURRENT
