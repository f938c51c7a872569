from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from typing import List

from ..services.wizard_service import WizardSession
from ..wizard.answers import Verdict
from ..wizard.catalog import Catalog, MultiSelectChecklist, Planner
from ..wizard.navigation import can_advance, next_label


def get_start_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="▶️ Start assessment", callback_data="wizard_start")]
    ])


def get_tabs_row(catalog: Catalog, current_step: int) -> List[InlineKeyboardButton]:
    """
    One button per step for direct jumps. The active step is marked.
    """
    buttons = []
    for index in range(len(catalog)):
        text = f"• {index + 1} •" if index == current_step else str(index + 1)
        buttons.append(InlineKeyboardButton(text=text, callback_data=f"w_goto:{index}"))
    return buttons


def get_step_keyboard(catalog: Catalog, session: WizardSession) -> InlineKeyboardMarkup:
    """
    Generates the keyboard for the active step: tabs, answer buttons for the
    step kind, and Previous/Next.
    """
    step_index = session.nav.current_step
    step = catalog[step_index]
    row_answers = session.answers[step_index]

    buttons = [get_tabs_row(catalog, step_index)]

    if isinstance(step, Planner):
        for i, field in enumerate(step.fields):
            row = [InlineKeyboardButton(text=f"✏️ {field.label}", callback_data=f"w_field:{step_index}:{i}")]
            if row_answers[i]:
                row.append(InlineKeyboardButton(text="🗑 Clear", callback_data=f"w_clear:{step_index}:{i}"))
            buttons.append(row)
    elif isinstance(step, MultiSelectChecklist):
        for i, item in enumerate(step.items):
            mark = "☑️" if row_answers[i] else "⬜"
            buttons.append([
                InlineKeyboardButton(text=f"{mark} {item.label}", callback_data=f"w_toggle:{step_index}:{i}")
            ])
    else:
        for i, item in enumerate(step.items):
            answer = row_answers[i]
            yes_text = f"{i + 1}. ✅ Yes" if answer == Verdict.YES else f"{i + 1}. Yes"
            no_text = "❌ No" if answer == Verdict.NO else "No"
            buttons.append([
                InlineKeyboardButton(text=yes_text, callback_data=f"w_ans:{step_index}:{i}:yes"),
                InlineKeyboardButton(text=no_text, callback_data=f"w_ans:{step_index}:{i}:no"),
            ])

    nav_row = []
    if step_index > 0:
        nav_row.append(InlineKeyboardButton(text="⬅️ Previous", callback_data="w_prev"))
    label = next_label(session.nav, catalog)
    # Locked until the step passes gating; pressing it explains why.
    if can_advance(step, row_answers):
        nav_row.append(InlineKeyboardButton(text=f"{label} ➡️", callback_data="w_next"))
    else:
        nav_row.append(InlineKeyboardButton(text=f"🔒 {label}", callback_data="w_next"))
    buttons.append(nav_row)

    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_summary_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🖨 Print / Save", callback_data="w_export")],
        [InlineKeyboardButton(text="✏️ Edit Answers", callback_data="w_edit")],
    ])
