import pytest
from fastapi.testclient import TestClient
from telegram import Update

from bot.webhook import create_webhook_app, full_webhook_url
from handlers.callbacks.habits import interaction_event_from_update
from handlers.commands.habits import command_event_from_update, text_event_from_update

CHAT = {"id": 42, "type": "private", "first_name": "Anna"}
USER = {"id": 42, "is_bot": False, "first_name": "Anna"}


def message_update(text):
    return {
        "update_id": 1,
        "message": {"message_id": 5, "date": 1700000000, "chat": CHAT, "from": USER, "text": text},
    }


def callback_update(data):
    return {
        "update_id": 2,
        "callback_query": {
            "id": "cb-1",
            "from": USER,
            "chat_instance": "ci",
            "data": data,
            "message": {"message_id": 9, "date": 1700000000, "chat": CHAT, "text": "🎯 Exercise"},
        },
    }


class FakeApplication:
    bot = None

    def __init__(self):
        self.updates = []

    async def process_update(self, update):
        self.updates.append(update)


@pytest.fixture
def application():
    return FakeApplication()


@pytest.fixture
def client(application):
    return TestClient(create_webhook_app(application, webhook_url="https://example.org/webhook"))


def test_update_is_passed_to_application(client, application):
    response = client.post("/webhook", json=message_update("/listhabits"))

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert len(application.updates) == 1
    assert application.updates[0].effective_message.text == "/listhabits"


def test_invalid_json_is_rejected(client, application):
    response = client.post("/webhook", content=b"{not json",
                           headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert application.updates == []


def test_non_object_body_is_rejected(client, application):
    response = client.post("/webhook", json=[1, 2, 3])

    assert response.status_code == 400
    assert application.updates == []


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "webhook_url": "https://example.org/webhook"}


def test_full_webhook_url():
    assert full_webhook_url("https://example.org/") == "https://example.org/webhook"
    assert full_webhook_url("https://example.org") == "https://example.org/webhook"


def test_command_event_from_update():
    update = Update.de_json(message_update("/addhabit@my_bot Зарядка утром"), None)
    event = command_event_from_update(update)

    assert (event.command, event.args, event.chat_id) == ("addhabit", "Зарядка утром", 42)


def test_command_without_args():
    event = command_event_from_update(Update.de_json(message_update("/today"), None))
    assert (event.command, event.args) == ("today", "")


def test_interaction_event_from_update():
    event = interaction_event_from_update(Update.de_json(callback_update("plan_yes_3"), None))

    assert event.token == "plan_yes_3"
    assert (event.chat_id, event.message_id, event.interaction_id) == (42, 9, "cb-1")


def test_text_event_from_update():
    event = text_event_from_update(Update.de_json(message_update("привет"), None))
    assert (event.text, event.chat_id) == ("привет", 42)
