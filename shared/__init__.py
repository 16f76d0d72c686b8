from .errors import (
    HabitTrackerError,
    ValidationError,
    NotFoundError,
    InvalidTimeFormat,
    InvalidTimezone,
    PersistenceError,
    DecodeError,
    ConfigError,
)

__all__ = [
    'HabitTrackerError',
    'ValidationError',
    'NotFoundError',
    'InvalidTimeFormat',
    'InvalidTimezone',
    'PersistenceError',
    'DecodeError',
    'ConfigError',
]
