#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker Bot
Telegram бот: утреннее планирование и вечерняя проверка ежедневных привычек

Запуск: python main.py
Режим webhook включается переменной WEBHOOK_URL, иначе long polling.
"""

import asyncio
import logging
import signal
import sys

import uvicorn

from bot.application import build_application
from bot.gateway import TelegramGateway
from bot.webhook import create_webhook_app, full_webhook_url
from config import BotConfig, load_config
from database.manager import HabitManager
from database.owner import OwnerRegistry, OWNER_FILE
from handlers.controller import HabitController
from services.scheduler import DailyScheduler
from shared.errors import ConfigError, HabitTrackerError
from utils.logger import setup_logging

logger = logging.getLogger(__name__)

ALLOWED_UPDATES = ['message', 'callback_query']


class HabitTrackerBot:
    """Сборка компонентов и жизненный цикл бота"""

    def __init__(self, config: BotConfig):
        self.config = config
        config.ensure_directories()

        logger.info(f"✅ Конфигурация: {config.to_dict()}")

        self.manager = HabitManager.from_directory(config.data_dir)
        self.owner = OwnerRegistry(config.data_dir / OWNER_FILE, config.telegram.chat_id)

        self.application = build_application(config.telegram.bot_token)
        self.gateway = TelegramGateway(self.application.bot)
        self.controller = HabitController(
            self.manager,
            self.gateway,
            self.owner,
            timezone=config.schedule.timezone,
            morning_time=config.schedule.morning_time,
            evening_time=config.schedule.evening_time,
        )
        self.application.bot_data["controller"] = self.controller

        self.scheduler = DailyScheduler(config.schedule.timezone)
        self.scheduler.schedule(
            config.schedule.morning_time, self.controller.send_morning_plan, job_id="morning_plan"
        )
        self.scheduler.schedule(
            config.schedule.evening_time, self.controller.send_evening_review, job_id="evening_review"
        )

        if self.owner.chat_id is None:
            logger.info("👤 Чат владельца не задан, ждём первое сообщение (/start)")

    async def run(self):
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
            except NotImplementedError:
                pass  # Windows

        await self.application.initialize()
        await self.application.start()
        self.scheduler.start()

        try:
            if self.config.telegram.use_webhook:
                await self._run_webhook(stop_event)
            else:
                await self._run_polling(stop_event)
        finally:
            logger.info("🛑 Завершение работы...")
            await self.scheduler.stop()
            await self.application.stop()
            await self.application.shutdown()
            logger.info("👋 Бот остановлен")

    async def _run_polling(self, stop_event: asyncio.Event):
        logger.info("📞 Запуск в режиме POLLING")
        await self.application.bot.delete_webhook()
        await self.application.updater.start_polling(allowed_updates=ALLOWED_UPDATES)

        logger.info("✅ Habit Tracker Bot работает в режиме polling")
        self._log_schedule()

        try:
            await stop_event.wait()
        finally:
            await self.application.updater.stop()

    async def _run_webhook(self, stop_event: asyncio.Event):
        url = full_webhook_url(self.config.telegram.webhook_url)
        logger.info("🌐 Запуск в режиме WEBHOOK")

        await self.application.bot.set_webhook(url=url, allowed_updates=ALLOWED_UPDATES)
        info = await self.application.bot.get_webhook_info()
        logger.info(f"✅ Webhook установлен: {info.url} (ожидают {info.pending_update_count})")

        server = uvicorn.Server(uvicorn.Config(
            create_webhook_app(self.application, webhook_url=url),
            host=self.config.server.host,
            port=self.config.server.port,
            log_level="info",
            access_log=False,
        ))

        logger.info(f"📡 Слушаем {self.config.server.host}:{self.config.server.port}")
        self._log_schedule()

        serve_task = asyncio.create_task(server.serve())
        stop_task = asyncio.create_task(stop_event.wait())
        try:
            await asyncio.wait({serve_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            server.should_exit = True
            stop_task.cancel()
            await serve_task
            await self.application.bot.delete_webhook()
            logger.info("✅ Webhook удален")

    def _log_schedule(self):
        schedule = self.config.schedule
        logger.info(
            f"📅 Опросы: 🌅 {schedule.morning_time}, 🌙 {schedule.evening_time} ({schedule.timezone})"
        )


def main():
    """Главная функция запуска бота"""
    try:
        config = load_config()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
        logger.critical(f"❌ {e}")
        sys.exit(1)

    setup_logging(config)

    try:
        bot = HabitTrackerBot(config)
    except HabitTrackerError as e:
        logger.critical(f"❌ Критическая ошибка запуска: {e}")
        sys.exit(1)

    try:
        asyncio.run(bot.run())
    except KeyboardInterrupt:
        logger.info("⌨️ Получено прерывание с клавиатуры")


if __name__ == "__main__":
    main()
