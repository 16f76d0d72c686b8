from typing import Optional

from shared.errors import ValidationError

MAX_HABIT_NAME_LENGTH = 100


def clean_habit_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("habit name must not be empty")
    if len(name) > MAX_HABIT_NAME_LENGTH:
        raise ValidationError(f"habit name is longer than {MAX_HABIT_NAME_LENGTH} characters")
    return name


def parse_habit_id(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return None
