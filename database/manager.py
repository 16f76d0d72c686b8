# database/manager.py

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

import pytz

from database.counter import IdCounter, COUNTER_FILE
from database.json_store import JsonFileCollection
from models.habit import Habit, DailyLog, HabitResponse
from shared.errors import NotFoundError, PersistenceError
from utils.datetime_utils import date_key
from utils.locks import ReadWriteLock
from utils.validators import clean_habit_name

logger = logging.getLogger(__name__)

HABITS_FILE = "habits.json"
RESPONSES_FILE = "responses.json"
DAILY_LOGS_FILE = "daily_logs.json"

DateLike = Union[str, date]


def _utc_now() -> datetime:
    return datetime.now(pytz.UTC)


class HabitManager:
    """
    Хранилище привычек, дневных логов и журнала ответов

    Состояние загружается один раз при создании, дальше все операции
    работают с копией в памяти под блокировкой читатель/писатель.
    Каждое изменение синхронно записывает всю затронутую коллекцию
    в её собственный файл, не отпуская блокировку.

    Если запись на диск не удалась, изменение остаётся видимым в памяти,
    а вызывающий получает PersistenceError.
    """

    def __init__(self, habits_file: Union[str, Path], responses_file: Union[str, Path],
                 daily_logs_file: Union[str, Path], clock: Optional[Callable[[], datetime]] = None,
                 counter_file: Optional[Union[str, Path]] = None):
        self._habits_store = JsonFileCollection(habits_file)
        self._counter = IdCounter(counter_file or Path(habits_file).with_name(COUNTER_FILE))
        self._responses_store = JsonFileCollection(responses_file)
        self._daily_logs_store = JsonFileCollection(daily_logs_file)
        self._clock = clock or _utc_now
        self._lock = ReadWriteLock()

        self._habits: List[Habit] = [Habit.from_dict(item) for item in self._habits_store.load()]
        self._responses: List[HabitResponse] = [
            HabitResponse.from_dict(item) for item in self._responses_store.load()
        ]
        self._daily_logs: List[DailyLog] = [
            DailyLog.from_dict(item) for item in self._daily_logs_store.load()
        ]

        # ID не переиспользуются: сохранённый счётчик плюс ID из логов
        # (файлы данных могли быть записаны до появления counter.json)
        seen_ids = [self._counter.load()]
        seen_ids += [h.id for h in self._habits]
        seen_ids += [log.habit_id for log in self._daily_logs]
        seen_ids += [r.habit_id for r in self._responses]
        self._next_id = max(seen_ids) + 1

        logger.info(
            f"✅ HabitManager: привычек {len(self._habits)}, логов {len(self._daily_logs)}, "
            f"ответов {len(self._responses)}, следующий ID {self._next_id}"
        )

    @classmethod
    def from_directory(cls, data_dir: Union[str, Path], **kwargs) -> "HabitManager":
        data_dir = Path(data_dir)
        return cls(
            data_dir / HABITS_FILE,
            data_dir / RESPONSES_FILE,
            data_dir / DAILY_LOGS_FILE,
            **kwargs
        )

    # ===== Привычки =====

    def add_habit(self, name: str, description: str = "") -> Habit:
        """Добавить привычку; пустое имя - ValidationError"""
        name = clean_habit_name(name)
        with self._lock.write():
            habit = Habit(
                id=self._next_id,
                name=name,
                description=(description or "").strip(),
                created_at=self._clock().isoformat(),
            )
            self._habits.append(habit)
            self._next_id += 1
            self._save_counter(habit.id)
            self._save_habits()

        logger.info(f"➕ Добавлена привычка #{habit.id}: {habit.name}")
        return habit

    def list_habits(self) -> List[Habit]:
        with self._lock.read():
            return list(self._habits)

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        with self._lock.read():
            for habit in self._habits:
                if habit.id == habit_id:
                    return habit
        return None

    def delete_habit(self, habit_id: int) -> None:
        """Удалить привычку; логи и ответы не удаляются"""
        with self._lock.write():
            for i, habit in enumerate(self._habits):
                if habit.id == habit_id:
                    del self._habits[i]
                    self._save_habits()
                    break
            else:
                raise NotFoundError(habit_id)

        logger.info(f"🗑️ Удалена привычка #{habit_id}")

    # ===== Дневные логи =====

    def record_plan(self, habit_id: int, planned: bool, day: DateLike) -> DailyLog:
        """Записать утренний план; существующее значение completed сохраняется"""
        day = date_key(day)
        with self._lock.write():
            log = self._find_log(day, habit_id)
            if log is None:
                log = DailyLog(date=day, habit_id=habit_id, planned=planned, completed=False)
                self._daily_logs.append(log)
            else:
                log.planned = planned
            self._save_daily_logs()
            return DailyLog(**log.to_dict())

    def record_completion(self, habit_id: int, completed: bool, day: DateLike) -> DailyLog:
        """
        Записать вечерний итог; существующее значение planned сохраняется

        Без утреннего плана создаётся лог с planned=False даже при
        completed=True. Это известная особенность формата, не исправляется.
        """
        day = date_key(day)
        with self._lock.write():
            log = self._find_log(day, habit_id)
            if log is None:
                log = DailyLog(date=day, habit_id=habit_id, planned=False, completed=completed)
                self._daily_logs.append(log)
            else:
                log.completed = completed
            self._save_daily_logs()
            return DailyLog(**log.to_dict())

    def get_daily_logs(self, day: DateLike) -> List[DailyLog]:
        day = date_key(day)
        with self._lock.read():
            return [DailyLog(**log.to_dict()) for log in self._daily_logs if log.date == day]

    def _find_log(self, day: str, habit_id: int) -> Optional[DailyLog]:
        for log in self._daily_logs:
            if log.date == day and log.habit_id == habit_id:
                return log
        return None

    # ===== Журнал ответов =====

    def record_response(self, habit_id: int, completed: bool, day: DateLike) -> HabitResponse:
        """Добавить запись в журнал ответов (всегда новая запись)"""
        response = HabitResponse(
            habit_id=habit_id,
            completed=completed,
            date=date_key(day),
            timestamp=self._clock().isoformat(),
        )
        with self._lock.write():
            self._responses.append(response)
            self._save_responses()
        return response

    def list_responses(self) -> List[HabitResponse]:
        with self._lock.read():
            return list(self._responses)

    # ===== Сохранение =====

    def _save_counter(self, last_id: int):
        try:
            self._counter.save(last_id)
        except PersistenceError:
            logger.error(f"❌ Счётчик ID не сохранён на диск: {self._counter.path}")
            raise

    def _save_habits(self):
        self._persist(self._habits_store, self._habits)

    def _save_daily_logs(self):
        self._persist(self._daily_logs_store, self._daily_logs)

    def _save_responses(self):
        self._persist(self._responses_store, self._responses)

    @staticmethod
    def _persist(store: JsonFileCollection, records):
        try:
            store.save([record.to_dict() for record in records])
        except PersistenceError:
            logger.error(f"❌ Изменение не сохранено на диск: {store.path}")
            raise
