# handlers/controller.py

import asyncio
import logging
from typing import Dict, List, Optional, Union

import pytz
from telegram.error import TelegramError

from database.manager import HabitManager
from database.owner import OwnerRegistry
from handlers.tokens import decode_token
from models.enums import Phase
from models.events import CommandEvent, InteractionEvent, TextEvent
from models.habit import Habit, DailyLog
from shared.errors import DecodeError, NotFoundError, PersistenceError, ValidationError
from ui import messages
from ui.keyboards import choice_buttons
from utils.datetime_utils import get_timezone, today_str
from utils.validators import parse_habit_id

logger = logging.getLogger(__name__)


def review_candidates(habits: List[Habit], daily_logs: List[DailyLog]) -> List[Habit]:
    """
    Привычки для вечернего опроса

    Спрашиваем про те, что запланированы (planned=True), и про те,
    на которые утром не ответили. Отказ утром (planned=False) уважаем.
    """
    planned_by_id: Dict[int, bool] = {log.habit_id: log.planned for log in daily_logs}
    return [
        habit for habit in habits
        if habit.id not in planned_by_id or planned_by_id[habit.id]
    ]


class HabitController:
    """
    Команды пользователя, нажатия кнопок и утренний/вечерний опрос

    Хранилище пишет на диск синхронно, поэтому все обращения к нему
    выполняются в пуле потоков и не задерживают цикл событий планировщика.
    """

    def __init__(self, manager: HabitManager, gateway, owner: OwnerRegistry,
                 timezone: Union[str, pytz.BaseTzInfo], morning_time: str = "08:00",
                 evening_time: str = "21:00"):
        self.manager = manager
        self.gateway = gateway
        self.owner = owner
        self.timezone = get_timezone(timezone) if isinstance(timezone, str) else timezone
        self.morning_time = morning_time
        self.evening_time = evening_time

        self._commands = {
            "start": self._cmd_start,
            "help": self._cmd_help,
            "addhabit": self._cmd_add_habit,
            "listhabits": self._cmd_list_habits,
            "deletehabit": self._cmd_delete_habit,
            "today": self._cmd_today,
        }

    def today(self) -> str:
        return today_str(self.timezone)

    async def dispatch(self, event: Union[CommandEvent, InteractionEvent, TextEvent]):
        if isinstance(event, CommandEvent):
            await self.handle_command(event.command, event.args, event.chat_id)
        elif isinstance(event, InteractionEvent):
            await self.handle_interaction(
                event.token, event.chat_id, event.message_id, event.interaction_id
            )
        elif isinstance(event, TextEvent):
            await self.handle_text(event.text, event.chat_id)
        else:
            raise TypeError(f"unsupported event: {event!r}")

    # ===== Сообщения и команды =====

    async def handle_text(self, text: str, chat_id: int):
        """Обычный текст только регистрирует владельца, ответа нет"""
        await asyncio.to_thread(self.owner.register, chat_id)

    async def handle_command(self, command: str, args: str, chat_id: int):
        await asyncio.to_thread(self.owner.register, chat_id)

        handler = self._commands.get(command.lower())
        if handler is None:
            await self.gateway.send_text(chat_id, messages.unknown_command_message())
            return
        await handler((args or "").strip(), chat_id)

    async def _cmd_start(self, args: str, chat_id: int):
        await self.gateway.send_text(
            chat_id, messages.welcome_message(self.morning_time, self.evening_time)
        )

    async def _cmd_help(self, args: str, chat_id: int):
        await self.gateway.send_text(chat_id, messages.help_message())

    async def _cmd_add_habit(self, args: str, chat_id: int):
        if not args:
            await self.gateway.send_text(chat_id, messages.add_habit_usage_message())
            return

        try:
            habit = await asyncio.to_thread(self.manager.add_habit, args, "")
        except (ValidationError, PersistenceError) as e:
            await self.gateway.send_text(chat_id, messages.error_message(e))
            return

        await self.gateway.send_text(chat_id, messages.habit_added_message(habit))

    async def _cmd_list_habits(self, args: str, chat_id: int):
        habits = await asyncio.to_thread(self.manager.list_habits)
        await self.gateway.send_text(chat_id, messages.habits_list_message(habits))

    async def _cmd_delete_habit(self, args: str, chat_id: int):
        if not args:
            await self.gateway.send_text(chat_id, messages.delete_habit_usage_message())
            return

        habit_id = parse_habit_id(args)
        if habit_id is None:
            await self.gateway.send_text(chat_id, messages.invalid_id_message())
            return

        try:
            await asyncio.to_thread(self.manager.delete_habit, habit_id)
        except (NotFoundError, PersistenceError) as e:
            await self.gateway.send_text(chat_id, messages.error_message(e))
            return

        await self.gateway.send_text(chat_id, messages.habit_deleted_message())

    async def _cmd_today(self, args: str, chat_id: int):
        day = self.today()
        habits = await asyncio.to_thread(self.manager.list_habits)
        logs = await asyncio.to_thread(self.manager.get_daily_logs, day)
        await self.gateway.send_text(chat_id, messages.today_status_message(day, habits, logs))

    # ===== Кнопки =====

    async def handle_interaction(self, token: str, chat_id: Optional[int],
                                 message_id: Optional[int], interaction_id: str):
        try:
            decoded = decode_token(token)
        except DecodeError as e:
            # старые кнопки из прошлых сообщений могут нажиматься до сих пор
            logger.debug(f"Пропущен callback: {e}")
            return

        habit = await asyncio.to_thread(self.manager.get_habit, decoded.habit_id)
        name = messages.habit_label(decoded.habit_id, habit.name if habit else None)
        day = self.today()

        try:
            if decoded.phase is Phase.PLAN:
                await asyncio.to_thread(self.manager.record_plan, decoded.habit_id, decoded.is_yes, day)
                text = messages.plan_confirmation(name, decoded.is_yes)
            else:
                await asyncio.to_thread(self._record_review, decoded.habit_id, decoded.is_yes, day)
                text = messages.review_confirmation(name, decoded.is_yes)
        except PersistenceError as e:
            logger.error(f"❌ Ошибка записи ответа {token!r}: {e}")
            await self.gateway.acknowledge_interaction(interaction_id, messages.save_failed_message())
            return

        logger.info(f"📝 {decoded.phase.value}: привычка #{decoded.habit_id} -> {decoded.choice.value} ({day})")

        await self.gateway.acknowledge_interaction(interaction_id, text)
        if chat_id is not None and message_id is not None:
            await self.gateway.edit_message(chat_id, message_id, text)

    def _record_review(self, habit_id: int, completed: bool, day: str):
        self.manager.record_completion(habit_id, completed, day)
        self.manager.record_response(habit_id, completed, day)

    # ===== Плановые опросы =====

    async def send_morning_plan(self):
        chat_id = self.owner.chat_id
        if chat_id is None:
            logger.info("Чат владельца ещё не известен, утренний опрос пропущен")
            return

        habits = await asyncio.to_thread(self.manager.list_habits)
        if not habits:
            await self.gateway.send_text(chat_id, messages.no_habits_message())
            return

        await self.gateway.send_text(chat_id, messages.morning_greeting_message())
        sent = await self._send_prompts(chat_id, habits, Phase.PLAN)
        logger.info(f"🌅 Утренний опрос: отправлено {sent} из {len(habits)}")

    async def send_evening_review(self):
        chat_id = self.owner.chat_id
        if chat_id is None:
            logger.info("Чат владельца ещё не известен, вечерний опрос пропущен")
            return

        habits = await asyncio.to_thread(self.manager.list_habits)
        logs = await asyncio.to_thread(self.manager.get_daily_logs, self.today())
        candidates = review_candidates(habits, logs)
        if not candidates:
            await self.gateway.send_text(chat_id, messages.evening_nothing_planned_message())
            return

        await self.gateway.send_text(chat_id, messages.evening_greeting_message())
        sent = await self._send_prompts(chat_id, candidates, Phase.REVIEW)
        logger.info(f"🌙 Вечерний опрос: отправлено {sent} из {len(candidates)}")

    async def _send_prompts(self, chat_id: int, habits: List[Habit], phase: Phase) -> int:
        render = messages.plan_prompt_message if phase is Phase.PLAN else messages.review_prompt_message
        sent = 0
        for habit in habits:
            try:
                await self.gateway.send_choice_prompt(chat_id, render(habit), choice_buttons(phase, habit.id))
                sent += 1
            except TelegramError as e:
                logger.error(f"❌ Не удалось отправить опрос по привычке #{habit.id}: {e}")
        return sent
