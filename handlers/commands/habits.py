# handlers/commands/habits.py

from telegram import Update
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from models.events import CommandEvent, TextEvent


def command_event_from_update(update: Update) -> CommandEvent:
    """/addhabit@my_bot Зарядка -> CommandEvent('addhabit', 'Зарядка', chat_id)"""
    head, _, args = update.effective_message.text.partition(" ")
    command = head.lstrip("/").split("@", 1)[0]
    return CommandEvent(command=command, args=args.strip(), chat_id=update.effective_chat.id)


def text_event_from_update(update: Update) -> TextEvent:
    return TextEvent(text=update.effective_message.text or "", chat_id=update.effective_chat.id)


async def command_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    controller = context.bot_data["controller"]
    await controller.dispatch(command_event_from_update(update))


async def text_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    # первое сообщение без команды тоже регистрирует владельца
    controller = context.bot_data["controller"]
    await controller.dispatch(text_event_from_update(update))


def register_habit_handlers(application: Application):
    application.add_handler(MessageHandler(filters.COMMAND, command_handler))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, text_handler))
