from typing import Optional, Tuple

from .answers import StepAnswers, Verdict
from .catalog import MultiSelectChecklist, Planner, StepDefinition, item_count


def compute_score(step_answers: Optional[StepAnswers], step: StepDefinition) -> Tuple[int, int]:
    """
    Returns (score, max) for one step.

    Graded checklists count "yes" answers, multi-select checklists count
    selected items. For planners the score is the number of filled fields,
    which is progress only and never used for gating.
    """
    max_score = item_count(step)
    if not step_answers:
        return 0, max_score
    if isinstance(step, Planner):
        return sum(1 for text in step_answers if text), max_score
    if isinstance(step, MultiSelectChecklist):
        return sum(1 for selected in step_answers if selected is True), max_score
    return sum(1 for answer in step_answers if answer == Verdict.YES), max_score


def score_title(step: StepDefinition) -> str:
    return "Progress" if isinstance(step, Planner) else "Reuse Readiness Score"
