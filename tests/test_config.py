import logging

import pytest

from config import BotConfig, LogLevel, DEFAULT_TIMEZONE
from shared.errors import ConfigError

TOKEN = "123456789:ABCdefGhIJKlmNoPQRstuVWXyz"


def make_config(**env):
    return BotConfig(env={"BOT_TOKEN": TOKEN, **env})


def test_defaults():
    config = make_config()

    assert config.telegram.bot_token == TOKEN
    assert config.telegram.chat_id is None
    assert not config.telegram.use_webhook
    assert config.schedule.morning_time == "08:00"
    assert config.schedule.evening_time == "21:00"
    assert config.schedule.timezone == DEFAULT_TIMEZONE
    assert (config.server.host, config.server.port) == ("0.0.0.0", 8080)
    assert str(config.data_dir) == "data"
    assert config.log_level is LogLevel.INFO


@pytest.mark.parametrize("env", [{}, {"BOT_TOKEN": ""}, {"BOT_TOKEN": "   "}])
def test_missing_token(env):
    with pytest.raises(ConfigError, match="BOT_TOKEN"):
        BotConfig(env=env)


def test_values_from_environment():
    config = make_config(
        CHAT_ID="-100123",
        MORNING_TIME="7:15",
        EVENING_TIME="22:30",
        TIMEZONE="Europe/Moscow",
        WEBHOOK_URL="https://example.org",
        PORT="8443",
        DATA_DIR="/tmp/habits",
        LOG_LEVEL="debug",
    )

    assert config.telegram.chat_id == -100123
    assert config.telegram.use_webhook
    assert config.schedule.morning_time == "7:15"
    assert config.schedule.timezone == "Europe/Moscow"
    assert config.server.port == 8443
    assert str(config.data_dir) == "/tmp/habits"
    assert config.log_level is LogLevel.DEBUG


def test_all_problems_reported_together():
    with pytest.raises(ConfigError) as exc_info:
        make_config(MORNING_TIME="25:99", EVENING_TIME="noon", TIMEZONE="Mars/Olympus",
                    PORT="80", CHAT_ID="me", LOG_LEVEL="LOUD")

    message = str(exc_info.value)
    for key in ("MORNING_TIME", "EVENING_TIME", "TIMEZONE", "80", "CHAT_ID", "LOG_LEVEL"):
        assert key in message


def test_token_is_masked():
    data = make_config().to_dict()
    assert TOKEN not in str(data)
    assert data["telegram"]["bot_token"].endswith("...")


def test_file_handler_only_when_enabled(tmp_path):
    with_file = make_config(LOG_DIR=str(tmp_path)).get_logging_config()
    without_file = make_config(LOG_TO_FILE="false").get_logging_config()

    assert with_file["handlers"]["file"]["filename"] == str(tmp_path / "bot.log")
    assert with_file["loggers"][""]["handlers"] == ["console", "file"]
    assert "file" not in without_file["handlers"]
    assert without_file["loggers"]["apscheduler"]["level"] == logging.getLevelName(logging.WARNING)


def test_ensure_directories(tmp_path):
    config = make_config(DATA_DIR=str(tmp_path / "data"), LOG_DIR=str(tmp_path / "logs"))
    config.ensure_directories()

    assert (tmp_path / "data").is_dir()
    assert (tmp_path / "logs").is_dir()
