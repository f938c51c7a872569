import logging
from dataclasses import dataclass, replace

from .answers import Answers, StepAnswers
from .catalog import Catalog, MultiSelectChecklist, Planner, StepDefinition
from .exceptions import NavigationError


@dataclass(frozen=True)
class NavigationState:
    current_step: int = 0
    summary_shown: bool = False


def can_advance(step: StepDefinition, step_answers: StepAnswers) -> bool:
    """
    Forward gating rule:
    planners never block, multi-select needs at least one selection,
    graded checklists need every item answered.
    """
    if isinstance(step, Planner):
        return True
    if isinstance(step, MultiSelectChecklist):
        return any(step_answers)
    return all(answer is not None for answer in step_answers)


def _require_active(nav: NavigationState, action: str) -> None:
    if nav.summary_shown:
        raise NavigationError(f"Cannot {action} while the summary is shown")


def go_to(nav: NavigationState, index: int) -> NavigationState:
    """ Jumps straight to a step. Completion of any step is not checked. """
    _require_active(nav, "switch steps")
    return replace(nav, current_step=index)


def previous(nav: NavigationState) -> NavigationState:
    _require_active(nav, "go back")
    if nav.current_step == 0:
        return nav
    return replace(nav, current_step=nav.current_step - 1)


def is_last_step(nav: NavigationState, catalog: Catalog) -> bool:
    return nav.current_step == len(catalog) - 1


def next_step(nav: NavigationState, catalog: Catalog, answers: Answers) -> NavigationState:
    """
    Moves forward when the current step passes gating.
    Finishing the last step shows the summary.
    """
    _require_active(nav, "advance")
    index = nav.current_step
    if not can_advance(catalog[index], answers[index]):
        raise NavigationError(f"Step {index} ('{catalog[index].name}') is not complete")
    if is_last_step(nav, catalog):
        logging.info("Last step finished, showing summary.")
        return replace(nav, summary_shown=True)
    return replace(nav, current_step=index + 1)


def edit_answers(nav: NavigationState) -> NavigationState:
    """ Leaves the summary and returns to the first step. Answers stay as they are. """
    if not nav.summary_shown:
        raise NavigationError("Answers can only be edited from the summary")
    return NavigationState(current_step=0, summary_shown=False)


def next_label(nav: NavigationState, catalog: Catalog) -> str:
    return "Finish & Show Summary" if is_last_step(nav, catalog) else "Next"
