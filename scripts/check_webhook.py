#!/usr/bin/env python3
"""
Проверка состояния webhook в Telegram
Использование: python scripts/check_webhook.py [--env-file .env]
"""

import sys
import asyncio
import argparse
from pathlib import Path

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from telegram import Bot
from telegram.error import TelegramError

from config import load_config
from shared.errors import ConfigError


def format_webhook_info(info) -> str:
    lines = ["📡 Статус webhook:", "━" * 40]

    if not info.url:
        lines.append("❌ Webhook не настроен (используется long polling)")
        return "\n".join(lines)

    lines.append(f"✅ Webhook URL: {info.url}")
    lines.append(f"⏳ Ожидающих обновлений: {info.pending_update_count}")
    if info.last_error_date:
        lines.append(f"⚠️  Последняя ошибка: {info.last_error_message}")
    else:
        lines.append("✅ Ошибок нет")
    return "\n".join(lines)


async def check_webhook(token: str) -> str:
    async with Bot(token=token) as bot:
        info = await bot.get_webhook_info()
    return format_webhook_info(info)


def main():
    parser = argparse.ArgumentParser(description='Проверка webhook Telegram бота')
    parser.add_argument('--env-file', default=None, help='Путь к .env файлу')
    args = parser.parse_args()

    try:
        config = load_config(args.env_file)
    except ConfigError as e:
        print(f"❌ {e}")
        sys.exit(1)

    try:
        print(asyncio.run(check_webhook(config.telegram.bot_token)))
    except TelegramError as e:
        print(f"❌ Ошибка получения информации о webhook: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
