# bot/gateway.py

import logging
from typing import Optional, Sequence, Tuple

from telegram import Bot, Message
from telegram.constants import ParseMode

from ui.keyboards import choice_keyboard

logger = logging.getLogger(__name__)


class TelegramGateway:
    """Тонкая обёртка над Telegram Bot API: отправка, ответы на кнопки, редактирование"""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_text(self, chat_id: int, text: str, parse_mode: Optional[str] = ParseMode.HTML) -> Message:
        return await self.bot.send_message(chat_id=chat_id, text=text, parse_mode=parse_mode)

    async def send_choice_prompt(self, chat_id: int, text: str,
                                 choices: Sequence[Tuple[str, str]]) -> Message:
        return await self.bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=ParseMode.HTML,
            reply_markup=choice_keyboard(choices),
        )

    async def acknowledge_interaction(self, interaction_id: str, text: str = None) -> bool:
        return await self.bot.answer_callback_query(callback_query_id=interaction_id, text=text)

    async def edit_message(self, chat_id: int, message_id: int, text: str):
        # без reply_markup кнопки исчезают
        return await self.bot.edit_message_text(text=text, chat_id=chat_id, message_id=message_id)
