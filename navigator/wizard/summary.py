from dataclasses import dataclass
from typing import List, Optional, Tuple

from .answers import Answers, Verdict
from .catalog import Catalog, MultiSelectChecklist, Planner
from .scoring import compute_score

SUMMARY_TITLE = "Summary: Your Data Reuse Assessment"
NOT_SELECTED = "—"


@dataclass(frozen=True)
class SummaryLine:
    label: str
    answer: str
    desc: Optional[str] = None


@dataclass(frozen=True)
class StepSummary:
    number: int
    name: str
    lines: Tuple[SummaryLine, ...]
    score: Optional[Tuple[int, int]] = None


def _verdict_text(answer) -> str:
    if answer == Verdict.YES:
        return "Yes"
    if answer == Verdict.NO:
        return "No"
    return "Not answered"


def build_summary(catalog: Catalog, answers: Answers) -> List[StepSummary]:
    """
    Read-only view of every step's answers.

    Planner steps list only the fields that have text and carry no score.
    """
    summaries = []
    for index, (step, row) in enumerate(zip(catalog, answers)):
        if isinstance(step, Planner):
            lines = tuple(
                SummaryLine(label=field.label, answer=text)
                for field, text in zip(step.fields, row)
                if text
            )
            score = None
        elif isinstance(step, MultiSelectChecklist):
            lines = tuple(
                SummaryLine(label=item.label, answer="Selected" if selected else NOT_SELECTED, desc=item.desc)
                for item, selected in zip(step.items, row)
            )
            score = compute_score(row, step)
        else:
            lines = tuple(
                SummaryLine(label=item.label, answer=_verdict_text(answer), desc=item.desc)
                for item, answer in zip(step.items, row)
            )
            score = compute_score(row, step)
        summaries.append(StepSummary(number=index + 1, name=step.name, lines=lines, score=score))
    return summaries


def format_summary(summaries: List[StepSummary]) -> str:
    """ Plain-text rendering used both on screen and for the exported file. """
    blocks = [SUMMARY_TITLE]
    for summary in summaries:
        heading = f"Step {summary.number}: {summary.name}"
        if summary.score is not None:
            heading += f" ({summary.score[0]}/{summary.score[1]})"
        lines = [heading]
        for line in summary.lines:
            text = f"- {line.label}: {line.answer}"
            if line.desc:
                text += f" ({line.desc})"
            lines.append(text)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
