import os

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

# Settings are created on import and need a token.
os.environ.setdefault("BOT_TOKEN", "123456:test-token")

from navigator.services.wizard_service import WizardService
from navigator.wizard.catalog import build_catalog, default_catalog


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def small_catalog():
    return build_catalog([
        {"name": "Graded", "checklist": [{"label": "A", "desc": "a?"}, {"label": "B", "desc": "b?"}]},
        {"name": "Multi", "checklist": [{"label": "X", "desc": "x"}, {"label": "Y", "desc": "y"}], "multi": True},
        {"name": "Plan", "fields": [{"label": "Owner", "type": "text"}, {"label": "Timeline", "type": "text"}]},
    ])


@pytest.fixture
def fsm_state():
    return FSMContext(storage=MemoryStorage(), key=StorageKey(bot_id=1, chat_id=42, user_id=42))


@pytest.fixture
def wizard_service(catalog):
    return WizardService(catalog)
