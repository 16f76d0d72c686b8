#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker Bot - Configuration
Централизованная конфигурация из переменных окружения с валидацией
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any, Mapping
from dataclasses import dataclass
from enum import Enum

from dotenv import load_dotenv

from shared.errors import ConfigError, HabitTrackerError
from utils.datetime_utils import get_timezone, parse_hhmm

DEFAULT_TIMEZONE = "America/Argentina/Buenos_Aires"
DEFAULT_MORNING_TIME = "08:00"
DEFAULT_EVENING_TIME = "21:00"


class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class TelegramConfig:
    """Конфигурация Telegram бота"""
    bot_token: str
    chat_id: Optional[int] = None
    webhook_url: Optional[str] = None

    @property
    def use_webhook(self) -> bool:
        return bool(self.webhook_url)


@dataclass
class ScheduleConfig:
    """Время ежедневных опросов"""
    morning_time: str = DEFAULT_MORNING_TIME
    evening_time: str = DEFAULT_EVENING_TIME
    timezone: str = DEFAULT_TIMEZONE


@dataclass
class ServerConfig:
    """Конфигурация сервера для webhook"""
    host: str = "0.0.0.0"
    port: int = 8080


class BotConfig:
    """Главный класс конфигурации"""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self._env = os.environ if env is None else env
        self._errors = []
        self._load_config()
        self._validate_config()

    def _get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._env.get(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Обязательные параметры
        self.telegram = TelegramConfig(
            bot_token=self._get_required_env('BOT_TOKEN'),
            chat_id=self._get_int('CHAT_ID'),
            webhook_url=self._get('WEBHOOK_URL'),
        )

        self.schedule = ScheduleConfig(
            morning_time=self._get('MORNING_TIME', DEFAULT_MORNING_TIME),
            evening_time=self._get('EVENING_TIME', DEFAULT_EVENING_TIME),
            timezone=self._get('TIMEZONE', DEFAULT_TIMEZONE),
        )

        self.server = ServerConfig(
            host=self._get('HOST', '0.0.0.0'),
            port=self._get_int('PORT', 8080),
        )

        # Директории
        self.data_dir = Path(self._get('DATA_DIR', 'data'))
        self.log_dir = Path(self._get('LOG_DIR', 'logs'))

        # Логирование
        level = self._get('LOG_LEVEL', 'INFO').upper()
        try:
            self.log_level = LogLevel(level)
        except ValueError:
            self._errors.append(f"LOG_LEVEL {level!r} не поддерживается")
            self.log_level = LogLevel.INFO
        self.log_to_file = self._get('LOG_TO_FILE', 'true').lower() == 'true'
        self.log_format = self._get(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _get_required_env(self, key: str) -> str:
        """Получение обязательной переменной окружения"""
        value = self._get(key)
        if not value:
            raise ConfigError(f"Обязательная переменная окружения {key} не найдена!")
        return value

    def _get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self._get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            self._errors.append(f"{key} должен быть целым числом, получено {value!r}")
            return default

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = list(self._errors)

        for key, value in (('MORNING_TIME', self.schedule.morning_time),
                           ('EVENING_TIME', self.schedule.evening_time)):
            try:
                parse_hhmm(value)
            except HabitTrackerError as e:
                errors.append(f"{key}: {e}")

        try:
            get_timezone(self.schedule.timezone)
        except HabitTrackerError as e:
            errors.append(f"TIMEZONE: {e}")

        # Проверка портов
        if not 1024 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1024-65535)")

        if errors:
            raise ConfigError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'telegram': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / "bot.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'telegram': {
                'bot_token': self.telegram.bot_token[:10] + "...",  # Скрываем токен
                'chat_id': self.telegram.chat_id,
                'use_webhook': self.telegram.use_webhook
            },
            'schedule': {
                'morning_time': self.schedule.morning_time,
                'evening_time': self.schedule.evening_time,
                'timezone': self.schedule.timezone
            },
            'server': {
                'host': self.server.host,
                'port': self.server.port
            },
            'data_dir': str(self.data_dir),
            'log_level': self.log_level.value
        }


def load_config(env_file: Optional[str] = None) -> BotConfig:
    """Чтение .env (если есть) и сборка конфигурации"""
    load_dotenv(env_file)
    return BotConfig()


__all__ = [
    'BotConfig',
    'LogLevel',
    'TelegramConfig',
    'ScheduleConfig',
    'ServerConfig',
    'load_config',
]
