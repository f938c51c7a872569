from aiogram.fsm.state import StatesGroup, State


class WizardFSM(StatesGroup):
    """
    Finite State Machine for the assessment wizard.
    Step index and answers live in FSM data, the state only tells
    which kind of input is expected next.
    """
    IN_STEP = State()
    WAIT_FIELD_TEXT = State()
    SUMMARY = State()
