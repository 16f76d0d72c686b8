from typing import Sequence, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from handlers.tokens import encode_token
from models.enums import Phase, Choice

PLAN_LABELS = {Choice.YES: "👍 Сделаю", Choice.NO: "⏭️ Не сегодня"}
REVIEW_LABELS = {Choice.YES: "✅ Да", Choice.NO: "❌ Нет"}


def choice_buttons(phase: Phase, habit_id: int) -> Tuple[Tuple[str, str], Tuple[str, str]]:
    """Две кнопки (подпись, callback_data) для фазы"""
    labels = PLAN_LABELS if phase is Phase.PLAN else REVIEW_LABELS
    return tuple(
        (labels[choice], encode_token(phase, choice, habit_id))
        for choice in (Choice.YES, Choice.NO)
    )


def choice_keyboard(choices: Sequence[Tuple[str, str]]) -> InlineKeyboardMarkup:
    keyboard = [[InlineKeyboardButton(label, callback_data=data) for label, data in choices]]
    return InlineKeyboardMarkup(keyboard)
