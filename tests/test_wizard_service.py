import pytest

from navigator.services.wizard_service import WizardService
from navigator.states.wizard import WizardFSM
from navigator.wizard.answers import Verdict
from navigator.wizard.exceptions import AnswerShapeError, NavigationError, StaleStepError
from navigator.wizard.navigation import NavigationState


async def test_start_creates_fresh_session(wizard_service, fsm_state):
    session = await wizard_service.start(fsm_state)

    assert session.nav == NavigationState()
    assert session.answers[0] == (None,) * 5
    assert await fsm_state.get_state() == WizardFSM.IN_STEP.state


async def test_load_without_session_starts_one(wizard_service, fsm_state):
    session = await wizard_service.load(fsm_state)
    assert session == wizard_service.new_session()
    assert (await fsm_state.get_data())["current_step"] == 0


async def test_answers_round_trip_through_fsm_data(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    await wizard_service.answer_single(fsm_state, 0, 1, "yes")

    data = await fsm_state.get_data()
    assert data["answers"][0] == [None, "yes", None, None, None]

    session = await wizard_service.load(fsm_state)
    assert session.answers[0][1] is Verdict.YES


async def test_stale_step_is_rejected(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    with pytest.raises(StaleStepError):
        await wizard_service.toggle_multi(fsm_state, 3, 0)


async def test_planner_field_flow(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    await wizard_service.go_to(fsm_state, 4)

    session = await wizard_service.request_field(fsm_state, 4, 1)
    assert session.pending_field == 1
    assert await fsm_state.get_state() == WizardFSM.WAIT_FIELD_TEXT.state

    session = await wizard_service.set_field(fsm_state, "Slide deck")
    assert session.answers[4][1] == "Slide deck"
    assert session.pending_field is None
    assert await fsm_state.get_state() == WizardFSM.IN_STEP.state

    session = await wizard_service.clear_field(fsm_state, 4, 1)
    assert session.answers[4][1] == ""


async def test_set_field_without_request_fails(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    with pytest.raises(StaleStepError):
        await wizard_service.set_field(fsm_state, "text")


async def test_request_field_on_checklist_fails(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    with pytest.raises(StaleStepError):
        await wizard_service.request_field(fsm_state, 0, 0)


async def test_navigation_clears_pending_field(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    await wizard_service.go_to(fsm_state, 4)
    await wizard_service.request_field(fsm_state, 4, 0)

    session = await wizard_service.previous(fsm_state)

    assert session.nav.current_step == 3
    assert session.pending_field is None


async def test_next_is_gated(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    with pytest.raises(NavigationError):
        await wizard_service.next(fsm_state)


async def test_summary_and_edit_answers(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    await wizard_service.answer_single(fsm_state, 0, 0, "yes")
    await wizard_service.go_to(fsm_state, 4)

    session = await wizard_service.next(fsm_state)
    assert session.nav.summary_shown
    assert await fsm_state.get_state() == WizardFSM.SUMMARY.state

    with pytest.raises(NavigationError):
        await wizard_service.go_to(fsm_state, 1)
    with pytest.raises(StaleStepError):
        await wizard_service.answer_single(fsm_state, 4, 0, "yes")

    answers_before = session.answers
    session = await wizard_service.edit_answers(fsm_state)

    assert session.nav == NavigationState()
    assert session.answers == answers_before
    assert await fsm_state.get_state() == WizardFSM.IN_STEP.state


async def test_restoring_mismatched_answers_fails(small_catalog, catalog, fsm_state):
    await WizardService(small_catalog).start(fsm_state)
    with pytest.raises(AnswerShapeError):
        await WizardService(catalog).load(fsm_state)


async def test_out_of_range_indices_are_stale(wizard_service, fsm_state):
    await wizard_service.start(fsm_state)
    with pytest.raises(StaleStepError):
        await wizard_service.go_to(fsm_state, 5)
    with pytest.raises(StaleStepError):
        await wizard_service.go_to(fsm_state, -1)
    with pytest.raises(StaleStepError):
        await wizard_service.answer_single(fsm_state, 0, 5, "yes")

    await wizard_service.go_to(fsm_state, 4)
    with pytest.raises(StaleStepError):
        await wizard_service.request_field(fsm_state, 4, 8)
    with pytest.raises(StaleStepError):
        await wizard_service.clear_field(fsm_state, 4, 8)

    session = await wizard_service.load(fsm_state)
    assert session.nav.current_step == 4
    assert session.pending_field is None


async def test_restoring_unknown_verdict_fails(wizard_service, fsm_state):
    session = await wizard_service.start(fsm_state)
    data = wizard_service.to_data(session)
    data["answers"][0][0] = "maybe"
    await fsm_state.update_data(answers=data["answers"])

    with pytest.raises(AnswerShapeError):
        await wizard_service.load(fsm_state)
