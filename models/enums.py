# models/enums.py

from enum import Enum


class Phase(str, Enum):
    PLAN = "plan"
    REVIEW = "review"


class Choice(str, Enum):
    YES = "yes"
    NO = "no"
