# models/events.py

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommandEvent:
    """Команда пользователя (/addhabit и т.д.)"""
    command: str
    args: str
    chat_id: int


@dataclass(frozen=True)
class InteractionEvent:
    """Нажатие inline-кнопки"""
    token: str
    chat_id: Optional[int]
    message_id: Optional[int]
    interaction_id: str


@dataclass(frozen=True)
class TextEvent:
    """Обычное сообщение без команды"""
    text: str
    chat_id: int
