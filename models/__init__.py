#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker Bot - Models Package
Модели данных, перечисления и входящие события
"""

from .enums import Phase, Choice
from .habit import Habit, DailyLog, HabitResponse
from .events import CommandEvent, InteractionEvent, TextEvent

__all__ = [
    # Enums
    'Phase',
    'Choice',

    # Habit models
    'Habit',
    'DailyLog',
    'HabitResponse',

    # Events
    'CommandEvent',
    'InteractionEvent',
    'TextEvent'
]
