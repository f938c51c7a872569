import logging
from typing import List
from aiogram import Router, F, types
from aiogram.exceptions import TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import BufferedInputFile
from aiogram.utils.markdown import hbold, hitalic
from aiogram.utils.text_decorations import html_decoration

from ..keyboards.wizard import get_step_keyboard, get_summary_keyboard
from ..services.wizard_service import WizardService, WizardSession
from ..states.wizard import WizardFSM
from ..wizard.answers import Verdict
from ..wizard.catalog import Catalog, MultiSelectChecklist, Planner, StepDefinition, step_kind_title
from ..wizard.exceptions import NavigationError, StaleStepError
from ..wizard.scoring import compute_score, score_title
from ..wizard.summary import build_summary, format_summary

router = Router()

STALE_STEP_TEXT = "This step is no longer active. Please use the latest message."
MESSAGE_LIMIT = 4096
PREVIEW_LIMIT = 200


def _quoted_length(char: str) -> int:
    return len(html_decoration.quote(char))


def _fitting_prefix(text: str, limit: int) -> int:
    """ Length of the longest prefix whose HTML-quoted form fits in `limit`. """
    size = 0
    for end, char in enumerate(text):
        size += _quoted_length(char)
        if size > limit:
            return end
    return len(text)


def preview_text(text: str, limit: int = PREVIEW_LIMIT) -> str:
    """ HTML-quoted text cut to at most `limit` characters, marked with an ellipsis when cut. """
    quoted = html_decoration.quote(text)
    if len(quoted) <= limit:
        return quoted
    return html_decoration.quote(text[:_fitting_prefix(text, limit - 1)]) + "…"


def split_message(text: str, limit: int = MESSAGE_LIMIT) -> List[str]:
    """
    Splits plain text into HTML-quoted chunks of at most `limit` characters.
    Chunks break between lines; a line too long for one message is cut.
    """
    chunks = []
    current = ""
    for line in text.split("\n"):
        quoted = html_decoration.quote(line)
        candidate = f"{current}\n{quoted}" if current else quoted
        if len(candidate) <= limit:
            current = candidate
            continue
        if current:
            chunks.append(current)
        while len(quoted) > limit:
            end = _fitting_prefix(line, limit)
            chunks.append(html_decoration.quote(line[:end]))
            line = line[end:]
            quoted = html_decoration.quote(line)
        current = quoted
    if current or not chunks:
        chunks.append(current)
    return chunks


def render_step_text(catalog: Catalog, session: WizardSession) -> str:
    """ Builds the HTML text of the active step, including the live score. """
    step_index = session.nav.current_step
    step = catalog[step_index]
    row = session.answers[step_index]

    lines = [hbold(f"Step {step_index + 1}: {step.name} {step_kind_title(step)}"), ""]

    if isinstance(step, Planner):
        lines.append(hitalic("(Optional) Fill in what you want to track or leave blank."))
        for i, field in enumerate(step.fields):
            value = preview_text(row[i]) if row[i] else hitalic("(empty)")
            lines.append(f"{i + 1}. {hbold(field.label)}: {value}")
        if session.pending_field is not None:
            pending_label = step.fields[session.pending_field].label
            lines += ["", f"✏️ Send the text for {hbold(pending_label)}"]
    else:
        if isinstance(step, MultiSelectChecklist):
            lines.append(hitalic("Select all that apply."))
        for i, item in enumerate(step.items):
            if isinstance(step, MultiSelectChecklist):
                status = "☑️" if row[i] else "⬜"
            elif row[i] == Verdict.YES:
                status = "✅ Yes"
            elif row[i] == Verdict.NO:
                status = "❌ No"
            else:
                status = "❔"
            lines.append(f"{i + 1}. {hbold(item.label)}: {status}")
            lines.append(f"    {hitalic(item.desc)}")

    score, max_score = compute_score(row, step)
    lines += ["", f"{score_title(step)}: {hbold(score)} out of {max_score}"]
    return "\n".join(lines)


def render_summary_chunks(catalog: Catalog, session: WizardSession) -> List[str]:
    """ The summary as one or more messages, each within Telegram's size limit. """
    return split_message("✅ " + format_summary(build_summary(catalog, session.answers)))


def gating_hint(step: StepDefinition) -> str:
    if isinstance(step, MultiSelectChecklist):
        return "Select at least one option before moving on."
    return "Please answer every item before moving on."


async def show_step(message: types.Message, wizard_service: WizardService, session: WizardSession, edit: bool = True):
    """ Helper function to display the active step or the summary. """
    catalog = wizard_service.catalog
    if session.nav.summary_shown:
        chunks = render_summary_chunks(catalog, session)
        keyboard = get_summary_keyboard()
    else:
        chunks = [render_step_text(catalog, session)]
        keyboard = get_step_keyboard(catalog, session)

    # The keyboard goes with the last chunk.
    for index, chunk in enumerate(chunks):
        markup = keyboard if index == len(chunks) - 1 else None
        if index > 0 or not edit:
            await message.answer(chunk, reply_markup=markup)
            continue
        try:
            await message.edit_text(chunk, reply_markup=markup)
        except TelegramBadRequest as e:
            # Re-selecting the same answer leaves the message unchanged.
            if "message is not modified" not in str(e):
                raise


@router.callback_query(F.data == "wizard_start")
async def start_wizard_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    session = await wizard_service.start(state)
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data.startswith("w_ans:"))
async def single_answer_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    """ Handles a yes/no answer on a graded checklist. """
    _, step_str, item_str, value = cb.data.split(":", 3)
    try:
        session = await wizard_service.answer_single(state, int(step_str), int(item_str), value)
    except StaleStepError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data.startswith("w_toggle:"))
async def toggle_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    """ Handles a multi-select toggle. """
    _, step_str, item_str = cb.data.split(":", 2)
    try:
        session = await wizard_service.toggle_multi(state, int(step_str), int(item_str))
    except StaleStepError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data.startswith("w_field:"))
async def field_select_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    _, step_str, field_str = cb.data.split(":", 2)
    try:
        session = await wizard_service.request_field(state, int(step_str), int(field_str))
    except StaleStepError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer("Send your text as a message.")


@router.callback_query(F.data.startswith("w_clear:"))
async def field_clear_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    _, step_str, field_str = cb.data.split(":", 2)
    try:
        session = await wizard_service.clear_field(state, int(step_str), int(field_str))
    except StaleStepError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.message(WizardFSM.WAIT_FIELD_TEXT, F.text)
async def field_text_handler(message: types.Message, state: FSMContext, wizard_service: WizardService):
    """ Stores the text message in the planner field chosen before. """
    session = await wizard_service.set_field(state, message.text)
    await message.answer("Saved.")
    await show_step(message, wizard_service, session, edit=False)


@router.message(WizardFSM.IN_STEP, F.text)
async def unexpected_text_handler(message: types.Message):
    await message.answer("Please use the buttons to answer. To fill in a planner field, tap it first.")


@router.callback_query(F.data.startswith("w_goto:"))
async def goto_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    _, index_str = cb.data.split(":", 1)
    try:
        session = await wizard_service.go_to(state, int(index_str))
    except StaleStepError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    except NavigationError:
        await cb.answer("Steps are locked while the summary is shown. Use Edit Answers.", show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data == "w_prev")
async def previous_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    try:
        session = await wizard_service.previous(state)
    except NavigationError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data == "w_next")
async def next_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    """ Moves forward, or shows the summary after the last step. """
    session = await wizard_service.load(state)
    try:
        session = await wizard_service.next(state)
    except NavigationError as e:
        logging.warning(f"Forward navigation rejected: {e}")
        if session.nav.summary_shown:
            await cb.answer(STALE_STEP_TEXT, show_alert=True)
        else:
            await cb.answer(gating_hint(wizard_service.catalog[session.nav.current_step]), show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data == "w_edit")
async def edit_answers_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    try:
        session = await wizard_service.edit_answers(state)
    except NavigationError:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    await show_step(cb.message, wizard_service, session)
    await cb.answer()


@router.callback_query(F.data == "w_export")
async def export_handler(cb: types.CallbackQuery, state: FSMContext, wizard_service: WizardService):
    """ Sends the summary as a text file the user can print or keep. """
    # Reads without starting a session, so an old button after /start stays inert.
    session = wizard_service.from_data(await state.get_data())
    if session is None or not session.nav.summary_shown:
        await cb.answer(STALE_STEP_TEXT, show_alert=True)
        return
    text = format_summary(build_summary(wizard_service.catalog, session.answers))
    document = BufferedInputFile(text.encode("utf-8"), filename=wizard_service.export_filename)
    await cb.message.answer_document(document, caption="Your Data Reuse Assessment")
    logging.info(f"Summary exported for user {cb.from_user.id}.")
    await cb.answer()
