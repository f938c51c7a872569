import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from aiogram.fsm.context import FSMContext

from ..states.wizard import WizardFSM
from ..wizard import answers as answer_store
from ..wizard import navigation
from ..wizard.answers import Answers, Verdict
from ..wizard.catalog import Catalog, GradedChecklist, Planner, item_count
from ..wizard.exceptions import AnswerShapeError, StaleStepError


@dataclass(frozen=True)
class WizardSession:
    """Snapshot of one chat's wizard: answers, position and the planner field awaiting text."""
    answers: Answers
    nav: navigation.NavigationState = field(default_factory=navigation.NavigationState)
    pending_field: Optional[int] = None


class WizardService:
    """
    Owns the step catalog and applies wizard transitions to the session
    stored in the chat's FSM data.
    """
    def __init__(self, catalog: Catalog, export_filename: str = "data-reuse-summary.txt"):
        self.catalog = catalog
        self.export_filename = export_filename

    def new_session(self) -> WizardSession:
        return WizardSession(answers=answer_store.initial_answers(self.catalog))

    # --- FSM data (de)serialisation ---

    def to_data(self, session: WizardSession) -> Dict[str, Any]:
        return {
            "answers": [
                [value.value if isinstance(value, Verdict) else value for value in row]
                for row in session.answers
            ],
            "current_step": session.nav.current_step,
            "summary_shown": session.nav.summary_shown,
            "pending_field": session.pending_field,
        }

    def from_data(self, data: Dict[str, Any]) -> Optional[WizardSession]:
        raw_answers = data.get("answers")
        if raw_answers is None:
            return None
        answer_store.check_shape(raw_answers, self.catalog)

        rows = []
        for step, row in zip(self.catalog, raw_answers):
            if isinstance(step, GradedChecklist):
                try:
                    rows.append(tuple(None if value is None else Verdict(value) for value in row))
                except ValueError:
                    raise AnswerShapeError(f"Step '{step.name}' holds an answer other than yes/no: {row!r}") from None
            elif isinstance(step, Planner):
                rows.append(tuple(str(value) for value in row))
            else:
                rows.append(tuple(bool(value) for value in row))

        nav = navigation.NavigationState(
            current_step=data.get("current_step", 0),
            summary_shown=data.get("summary_shown", False),
        )
        return WizardSession(answers=tuple(rows), nav=nav, pending_field=data.get("pending_field"))

    # --- Storage ---

    async def start(self, state: FSMContext) -> WizardSession:
        session = self.new_session()
        await self.save(state, session)
        logging.info(f"Wizard session started with {len(self.catalog)} steps.")
        return session

    async def load(self, state: FSMContext) -> WizardSession:
        session = self.from_data(await state.get_data())
        if session is None:
            logging.info("No wizard session in FSM data, starting a fresh one.")
            session = await self.start(state)
        return session

    async def save(self, state: FSMContext, session: WizardSession) -> None:
        await state.update_data(**self.to_data(session))
        if session.nav.summary_shown:
            await state.set_state(WizardFSM.SUMMARY)
        elif session.pending_field is not None:
            await state.set_state(WizardFSM.WAIT_FIELD_TEXT)
        else:
            await state.set_state(WizardFSM.IN_STEP)

    # --- Answer Store ---

    def _require_current(self, session: WizardSession, step_index: int, item_index: Optional[int] = None) -> None:
        if session.nav.summary_shown or step_index != session.nav.current_step:
            raise StaleStepError(f"Step {step_index} is not the active step")
        if item_index is not None and not 0 <= item_index < item_count(self.catalog[step_index]):
            raise StaleStepError(f"Step {step_index} has no item {item_index}")

    async def answer_single(self, state: FSMContext, step_index: int, item_index: int, value: str) -> WizardSession:
        session = await self.load(state)
        self._require_current(session, step_index, item_index)
        answers = answer_store.set_single_answer(session.answers, self.catalog, step_index, item_index, value)
        session = replace(session, answers=answers)
        await self.save(state, session)
        return session

    async def toggle_multi(self, state: FSMContext, step_index: int, item_index: int) -> WizardSession:
        session = await self.load(state)
        self._require_current(session, step_index, item_index)
        answers = answer_store.toggle_multi_answer(session.answers, self.catalog, step_index, item_index)
        session = replace(session, answers=answers)
        await self.save(state, session)
        return session

    async def request_field(self, state: FSMContext, step_index: int, field_index: int) -> WizardSession:
        """ Marks the planner field that the next text message will fill in. """
        session = await self.load(state)
        self._require_current(session, step_index, field_index)
        if not isinstance(self.catalog[step_index], Planner):
            raise StaleStepError(f"Step {step_index} has no text fields")
        session = replace(session, pending_field=field_index)
        await self.save(state, session)
        return session

    async def set_field(self, state: FSMContext, text: str) -> WizardSession:
        session = await self.load(state)
        if session.pending_field is None or session.nav.summary_shown:
            raise StaleStepError("No planner field is waiting for text")
        step_index = session.nav.current_step
        answers = answer_store.set_field_answer(
            session.answers, self.catalog, step_index, session.pending_field, text
        )
        session = replace(session, answers=answers, pending_field=None)
        await self.save(state, session)
        return session

    async def clear_field(self, state: FSMContext, step_index: int, field_index: int) -> WizardSession:
        session = await self.load(state)
        self._require_current(session, step_index, field_index)
        answers = answer_store.set_field_answer(session.answers, self.catalog, step_index, field_index, "")
        session = replace(session, answers=answers, pending_field=None)
        await self.save(state, session)
        return session

    # --- Navigation Controller ---

    async def _navigate(self, state: FSMContext, session: WizardSession, nav: navigation.NavigationState) -> WizardSession:
        session = replace(session, nav=nav, pending_field=None)
        await self.save(state, session)
        return session

    async def go_to(self, state: FSMContext, index: int) -> WizardSession:
        session = await self.load(state)
        if not 0 <= index < len(self.catalog):
            raise StaleStepError(f"There is no step {index}")
        nav = navigation.go_to(session.nav, index)
        logging.info(f"Jumping from step {session.nav.current_step} to step {index}.")
        return await self._navigate(state, session, nav)

    async def previous(self, state: FSMContext) -> WizardSession:
        session = await self.load(state)
        return await self._navigate(state, session, navigation.previous(session.nav))

    async def next(self, state: FSMContext) -> WizardSession:
        session = await self.load(state)
        nav = navigation.next_step(session.nav, self.catalog, session.answers)
        return await self._navigate(state, session, nav)

    async def edit_answers(self, state: FSMContext) -> WizardSession:
        session = await self.load(state)
        return await self._navigate(state, session, navigation.edit_answers(session.nav))
