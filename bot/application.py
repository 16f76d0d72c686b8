from telegram.ext import Application, ApplicationBuilder

from bot.middleware import setup_middlewares
from handlers.router import register_handlers


def build_application(token: str) -> Application:
    # Обработчики берут контроллер из bot_data["controller"]
    application = (
        ApplicationBuilder()
        .token(token)
        .concurrent_updates(True)
        .build()
    )

    setup_middlewares(application)
    register_handlers(application)

    return application
