# handlers/tokens.py

"""
Формат callback_data inline-кнопок

    <phase>_<choice>_<habit_id>   например plan_yes_7, review_no_2
    <choice>_<habit_id>           старый формат, трактуется как review
"""

from dataclasses import dataclass

from models.enums import Phase, Choice
from shared.errors import DecodeError

DELIMITER = "_"


@dataclass(frozen=True)
class InteractionToken:
    phase: Phase
    choice: Choice
    habit_id: int

    @property
    def is_yes(self) -> bool:
        return self.choice is Choice.YES


def encode_token(phase: Phase, choice: Choice, habit_id: int) -> str:
    return DELIMITER.join((Phase(phase).value, Choice(choice).value, str(int(habit_id))))


def decode_token(data: str) -> InteractionToken:
    parts = (data or "").split(DELIMITER)

    if len(parts) == 3:
        phase_raw, choice_raw, id_raw = parts
    elif len(parts) == 2:
        phase_raw = Phase.REVIEW.value
        choice_raw, id_raw = parts
    else:
        raise DecodeError(f"unexpected token shape: {data!r}")

    try:
        phase = Phase(phase_raw)
        choice = Choice(choice_raw)
        habit_id = int(id_raw)
    except ValueError as e:
        raise DecodeError(f"malformed token {data!r}: {e}") from None

    return InteractionToken(phase=phase, choice=choice, habit_id=habit_id)
