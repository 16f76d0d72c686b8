from datetime import datetime

import pytest
import pytz
from telegram.error import TelegramError

from database.manager import HabitManager
from database.owner import OwnerRegistry, OWNER_FILE
from handlers.controller import HabitController

TZ = "America/Argentina/Buenos_Aires"
OWNER_CHAT_ID = 4242


class FakeGateway:
    """Записывает все вызовы вместо отправки в Telegram"""

    def __init__(self):
        self.texts = []
        self.prompts = []
        self.acks = []
        self.edits = []
        self.fail_prompts_for = set()

    async def send_text(self, chat_id, text, parse_mode=None):
        self.texts.append((chat_id, text))

    async def send_choice_prompt(self, chat_id, text, choices):
        tokens = [data for _, data in choices]
        if any(token.endswith(f"_{habit_id}") for token in tokens for habit_id in self.fail_prompts_for):
            raise TelegramError("chat not found")
        self.prompts.append((chat_id, text, tokens))

    async def acknowledge_interaction(self, interaction_id, text=None):
        self.acks.append((interaction_id, text))
        return True

    async def edit_message(self, chat_id, message_id, text):
        self.edits.append((chat_id, message_id, text))

    @property
    def calls(self):
        return len(self.texts) + len(self.prompts) + len(self.acks) + len(self.edits)


@pytest.fixture
def fixed_clock():
    return lambda: pytz.UTC.localize(datetime(2025, 3, 10, 12, 0, 0))


@pytest.fixture
def manager(tmp_path, fixed_clock):
    return HabitManager.from_directory(tmp_path, clock=fixed_clock)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def owner(tmp_path):
    return OwnerRegistry(tmp_path / OWNER_FILE, configured_chat_id=OWNER_CHAT_ID)


@pytest.fixture
def controller(manager, gateway, owner):
    return HabitController(manager, gateway, owner, timezone=TZ,
                           morning_time="08:00", evening_time="21:00")
