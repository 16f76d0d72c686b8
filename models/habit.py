# models/habit.py

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class Habit:
    """Привычка пользователя"""
    id: int
    name: str
    description: str = ""
    created_at: Optional[str] = None  # ISO-8601

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            created_at=data.get("created_at"),
        )


@dataclass
class DailyLog:
    """План и выполнение привычки за один день, ключ (date, habit_id)"""
    date: str  # YYYY-MM-DD
    habit_id: int
    planned: bool = False
    completed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "DailyLog":
        return cls(
            date=data["date"],
            habit_id=int(data["habit_id"]),
            planned=bool(data.get("planned", False)),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class HabitResponse:
    """Запись журнала ответов (однофазный формат, только добавление)"""
    habit_id: int
    completed: bool
    date: str
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "HabitResponse":
        return cls(
            habit_id=int(data["habit_id"]),
            completed=bool(data["completed"]),
            date=data["date"],
            timestamp=data["timestamp"],
        )
