# handlers/callbacks/habits.py

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, ContextTypes

from models.events import InteractionEvent


def interaction_event_from_update(update: Update) -> InteractionEvent:
    query = update.callback_query
    message = query.message
    return InteractionEvent(
        token=query.data or "",
        chat_id=message.chat.id if message else None,
        message_id=message.message_id if message else None,
        interaction_id=query.id,
    )


async def habit_choice_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    controller = context.bot_data["controller"]
    await controller.dispatch(interaction_event_from_update(update))


def register_habits_callbacks(application: Application):
    application.add_handler(CallbackQueryHandler(habit_choice_callback))
