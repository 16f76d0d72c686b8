# database/counter.py

import json
import logging
from pathlib import Path
from typing import Union

from shared.errors import PersistenceError

logger = logging.getLogger(__name__)

COUNTER_FILE = "counter.json"


class IdCounter:
    """
    Последний выданный ID привычки

    Хранится отдельно от коллекций, чтобы ID удалённой привычки
    не выдавался повторно после перезапуска.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding='utf-8') or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} must contain a JSON object")
        try:
            return int(data.get("last_id", 0))
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"invalid last_id in {self.path}: {e}") from e

    def save(self, last_id: int):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.path.with_suffix('.tmp')
            temp_file.write_text(json.dumps({"last_id": last_id}, indent=2), encoding='utf-8')
            temp_file.replace(self.path)
        except OSError as e:
            logger.error(f"❌ Не удалось сохранить счётчик ID: {e}")
            raise PersistenceError(f"failed to write {self.path}: {e}") from e
