import pytest

from handlers.tokens import decode_token, encode_token
from models.enums import Choice, Phase
from shared.errors import DecodeError


def test_three_part_token():
    token = decode_token("plan_yes_7")
    assert (token.phase, token.choice, token.habit_id) == (Phase.PLAN, Choice.YES, 7)
    assert token.is_yes


def test_review_token():
    token = decode_token("review_no_12")
    assert (token.phase, token.choice, token.habit_id) == (Phase.REVIEW, Choice.NO, 12)
    assert not token.is_yes


def test_legacy_two_part_token_is_review():
    token = decode_token("yes_7")
    assert (token.phase, token.choice, token.habit_id) == (Phase.REVIEW, Choice.YES, 7)


@pytest.mark.parametrize("data", [
    "garbage",
    "plan_yes_notanumber",
    "",
    None,
    "plan_yes_7_extra",
    "later_yes_7",
    "plan_maybe_7",
    "no_",
    "yes_7.5",
])
def test_malformed_tokens_raise_decode_error(data):
    with pytest.raises(DecodeError):
        decode_token(data)


def test_encode_matches_decoder():
    assert encode_token(Phase.PLAN, Choice.NO, 3) == "plan_no_3"
    assert encode_token("review", "yes", 42) == "review_yes_42"
    assert decode_token(encode_token(Phase.REVIEW, Choice.NO, 5)).habit_id == 5
