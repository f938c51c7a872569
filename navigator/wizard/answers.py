from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .catalog import Catalog, GradedChecklist, MultiSelectChecklist, Planner, StepDefinition, item_count
from .exceptions import AnswerShapeError, PreconditionError, StepKindError


class Verdict(str, Enum):
    YES = "yes"
    NO = "no"


# A graded item holds a Verdict or None while unanswered.
AnswerValue = Union[Optional[Verdict], bool, str]
StepAnswers = Tuple[AnswerValue, ...]
Answers = Tuple[StepAnswers, ...]


def initial_step_answers(step: StepDefinition) -> StepAnswers:
    if isinstance(step, Planner):
        return ("",) * len(step.fields)
    if isinstance(step, MultiSelectChecklist):
        return (False,) * len(step.items)
    return (None,) * len(step.items)


def initial_answers(catalog: Catalog) -> Answers:
    return tuple(initial_step_answers(step) for step in catalog)


def _require_kind(catalog: Catalog, step_index: int, kind: type) -> StepDefinition:
    step = catalog[step_index]
    if not isinstance(step, kind):
        raise StepKindError(
            f"Step {step_index} ('{step.name}') is a {type(step).__name__}, expected {kind.__name__}"
        )
    return step


def _replace(answers: Answers, step_index: int, item_index: int, value: AnswerValue) -> Answers:
    row = answers[step_index]
    if not 0 <= item_index < len(row):
        raise IndexError(f"Item {item_index} is out of range for step {step_index}")
    new_row = row[:item_index] + (value,) + row[item_index + 1:]
    return answers[:step_index] + (new_row,) + answers[step_index + 1:]


def set_single_answer(answers: Answers, catalog: Catalog, step_index: int, item_index: int, value) -> Answers:
    """
    Records a yes/no answer for a graded checklist item.
    Any previous answer is overwritten.
    """
    _require_kind(catalog, step_index, GradedChecklist)
    try:
        verdict = Verdict(value)
    except ValueError:
        raise PreconditionError(f"Answer must be 'yes' or 'no', got {value!r}") from None
    return _replace(answers, step_index, item_index, verdict)


def toggle_multi_answer(answers: Answers, catalog: Catalog, step_index: int, item_index: int) -> Answers:
    _require_kind(catalog, step_index, MultiSelectChecklist)
    return _replace(answers, step_index, item_index, not answers[step_index][item_index])


def set_field_answer(answers: Answers, catalog: Catalog, step_index: int, field_index: int, text: str) -> Answers:
    """ Stores planner text as given, empty strings included. """
    _require_kind(catalog, step_index, Planner)
    if not isinstance(text, str):
        raise PreconditionError(f"Field answer must be a string, got {type(text).__name__}")
    return _replace(answers, step_index, field_index, text)


def check_shape(answers: Sequence[Sequence], catalog: Catalog) -> None:
    if len(answers) != len(catalog):
        raise AnswerShapeError(f"Expected answers for {len(catalog)} steps, got {len(answers)}")
    for index, (row, step) in enumerate(zip(answers, catalog)):
        if len(row) != item_count(step):
            raise AnswerShapeError(
                f"Step {index} ('{step.name}') expects {item_count(step)} answers, got {len(row)}"
            )
