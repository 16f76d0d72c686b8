# shared/errors.py

"""
Иерархия исключений Habit Tracker Bot

ValidationError / NotFoundError показываются пользователю в чате,
PersistenceError пробрасывается вызывающему коду хранилища,
InvalidTimeFormat / InvalidTimezone / ConfigError фатальны при запуске,
DecodeError тихо отбрасывается контроллером.
"""


class HabitTrackerError(Exception):
    """Базовое исключение проекта"""


class ValidationError(HabitTrackerError):
    """Некорректные данные от пользователя (например, пустое имя привычки)"""


class NotFoundError(HabitTrackerError):
    """Привычка с указанным ID не найдена"""

    def __init__(self, habit_id: int):
        super().__init__(f"habit with ID {habit_id} not found")
        self.habit_id = habit_id


class InvalidTimeFormat(HabitTrackerError, ValueError):
    """Время не в формате HH:MM (24 часа)"""


class InvalidTimezone(HabitTrackerError, ValueError):
    """Неизвестный идентификатор часового пояса"""


class PersistenceError(HabitTrackerError):
    """Ошибка чтения или записи JSON-файла"""


class DecodeError(HabitTrackerError):
    """Некорректный токен inline-кнопки"""


class ConfigError(HabitTrackerError, ValueError):
    """Ошибка конфигурации окружения"""
