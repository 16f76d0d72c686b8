# handlers/router.py

from telegram.ext import Application

from handlers.commands.habits import register_habit_handlers
from handlers.callbacks.habits import register_habits_callbacks


def register_handlers(application: Application):
    """Подключает все обработчики в Application"""
    register_habit_handlers(application)
    register_habits_callbacks(application)
