from .manager import HabitManager
from .owner import OwnerRegistry

__all__ = ['HabitManager', 'OwnerRegistry']
