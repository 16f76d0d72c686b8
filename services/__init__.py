"""
Habit Tracker Bot - Сервисы
"""

from .scheduler import DailyScheduler

__all__ = ['DailyScheduler']
