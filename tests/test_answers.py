import pytest

from navigator.wizard.answers import (
    Verdict,
    check_shape,
    initial_answers,
    set_field_answer,
    set_single_answer,
    toggle_multi_answer,
)
from navigator.wizard.catalog import item_count
from navigator.wizard.exceptions import AnswerShapeError, PreconditionError, StepKindError


def test_initial_answers_follow_step_kinds(catalog):
    answers = initial_answers(catalog)

    assert answers[0] == (None,) * 5
    assert answers[3] == (False,) * 6
    assert answers[4] == ("",) * 8


def test_row_lengths_never_change(catalog):
    answers = initial_answers(catalog)
    answers = set_single_answer(answers, catalog, 0, 4, "yes")
    answers = set_single_answer(answers, catalog, 1, 0, "no")
    answers = toggle_multi_answer(answers, catalog, 3, 5)
    answers = set_field_answer(answers, catalog, 4, 7, "weekly meeting notes")

    assert [len(row) for row in answers] == [item_count(step) for step in catalog]
    check_shape(answers, catalog)


def test_set_single_answer_overwrites(catalog):
    answers = initial_answers(catalog)
    answers = set_single_answer(answers, catalog, 0, 2, "yes")
    answers = set_single_answer(answers, catalog, 0, 2, "no")

    assert answers[0][2] == Verdict.NO
    assert answers[0][2] == "no"


def test_mutation_returns_independent_snapshot(catalog):
    before = initial_answers(catalog)
    after = set_single_answer(before, catalog, 0, 0, "yes")

    assert before[0][0] is None
    assert after[0][0] == Verdict.YES
    # Untouched rows are shared values, the touched row is new.
    assert after[1] == before[1]
    assert after[0] is not before[0]


def test_toggle_multi_answer_flips(catalog):
    answers = initial_answers(catalog)
    answers = toggle_multi_answer(answers, catalog, 3, 1)
    assert answers[3][1] is True
    answers = toggle_multi_answer(answers, catalog, 3, 1)
    assert answers[3][1] is False


def test_set_field_answer_keeps_text_verbatim(catalog):
    answers = initial_answers(catalog)
    answers = set_field_answer(answers, catalog, 4, 0, "  Secondary analysis \n")
    assert answers[4][0] == "  Secondary analysis \n"
    answers = set_field_answer(answers, catalog, 4, 0, "")
    assert answers[4][0] == ""


@pytest.mark.parametrize("call", [
    lambda a, c: set_single_answer(a, c, 3, 0, "yes"),
    lambda a, c: set_single_answer(a, c, 4, 0, "yes"),
    lambda a, c: toggle_multi_answer(a, c, 0, 0),
    lambda a, c: set_field_answer(a, c, 0, 0, "text"),
])
def test_mutator_on_wrong_step_kind_fails(catalog, call):
    with pytest.raises(StepKindError):
        call(initial_answers(catalog), catalog)


def test_single_answer_rejects_unknown_value(catalog):
    with pytest.raises(PreconditionError):
        set_single_answer(initial_answers(catalog), catalog, 0, 0, "maybe")


def test_check_shape_detects_resized_row(catalog):
    answers = [list(row) for row in initial_answers(catalog)]
    answers[2].append(None)
    with pytest.raises(AnswerShapeError):
        check_shape(answers, catalog)
