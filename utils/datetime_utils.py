from datetime import datetime, date
from typing import Tuple, Union
import re

import pytz

from shared.errors import InvalidTimeFormat, InvalidTimezone

DATE_FORMAT = "%Y-%m-%d"

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def get_timezone(name: str) -> pytz.BaseTzInfo:
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise InvalidTimezone(f"unknown time zone: {name!r}") from None


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Разбор строки HH:MM в (час, минута), 00-23 и 00-59"""
    match = _HHMM_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormat(f"invalid time {value!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeFormat(f"time {value!r} out of range 00:00-23:59")
    return hour, minute


def today_str(tz: pytz.BaseTzInfo) -> str:
    return datetime.now(tz).strftime(DATE_FORMAT)


def date_key(value: Union[str, date]) -> str:
    """Календарный день как строка YYYY-MM-DD"""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return datetime.strptime(value, DATE_FORMAT).strftime(DATE_FORMAT)
