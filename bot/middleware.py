# bot/middleware.py

import logging

from telegram import Update
from telegram.error import NetworkError, TimedOut
from telegram.ext import Application, ContextTypes, TypeHandler

logger = logging.getLogger(__name__)


async def log_update(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Журнал входящих обновлений до основных обработчиков"""
    if update.message:
        user = update.message.from_user
        logger.info(
            f"📩 Сообщение от {user.first_name if user else '?'} "
            f"(@{user.username if user else '?'}) в чате {update.message.chat.id}: {update.message.text!r}"
        )
    elif update.callback_query:
        logger.info(
            f"🔘 Callback от {update.callback_query.from_user.id}: {update.callback_query.data!r}"
        )
    logger.debug(f"📦 Update {update.update_id}: {update.to_json()}")


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Обработчик ошибок"""
    error = context.error

    if isinstance(error, (TimedOut, NetworkError)):
        logger.warning(f"⚠️ Временная сетевая ошибка: {error}")
        return

    logger.error(f"❌ Неожиданная ошибка: {error}", exc_info=error)


def setup_middlewares(application: Application):
    application.add_handler(TypeHandler(Update, log_update), group=-1)
    application.add_error_handler(error_handler)
