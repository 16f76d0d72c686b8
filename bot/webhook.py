# bot/webhook.py

import json
import logging

from fastapi import FastAPI, HTTPException, Request
from telegram import Update

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook"


def create_webhook_app(application, webhook_url: str = None, path: str = WEBHOOK_PATH) -> FastAPI:
    """FastAPI приложение, передающее обновления Telegram в Application"""
    webhook_app = FastAPI(title="Habit Tracker Bot Webhook")

    @webhook_app.post(path)
    async def webhook_handler(request: Request):
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Ошибка разбора update: {e}")
            raise HTTPException(status_code=400, detail="invalid JSON body")

        if not isinstance(data, dict):
            raise HTTPException(status_code=400, detail="update must be a JSON object")

        try:
            update = Update.de_json(data, application.bot)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"❌ Некорректный update: {e}")
            raise HTTPException(status_code=400, detail="malformed update")

        await application.process_update(update)
        return {"status": "ok"}

    @webhook_app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "webhook_url": webhook_url,
        }

    return webhook_app


def full_webhook_url(webhook_url: str, path: str = WEBHOOK_PATH) -> str:
    return f"{webhook_url.rstrip('/')}{path}"
