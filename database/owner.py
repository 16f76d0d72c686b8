# database/owner.py

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from shared.errors import PersistenceError

logger = logging.getLogger(__name__)

OWNER_FILE = "owner.json"


class OwnerRegistry:
    """
    Чат владельца, куда отправляются плановые напоминания

    Берётся из конфигурации (CHAT_ID), иначе регистрируется первым
    входящим сообщением и сохраняется в owner.json.
    """

    def __init__(self, path: Union[str, Path], configured_chat_id: Optional[int] = None):
        self.path = Path(path)
        self.configured_chat_id = configured_chat_id
        self._lock = threading.Lock()
        self._chat_id = configured_chat_id if configured_chat_id is not None else self._load()

    @property
    def chat_id(self) -> Optional[int]:
        return self._chat_id

    def register(self, chat_id: int) -> bool:
        """Запомнить чат, если владелец ещё не известен. True - если зарегистрирован сейчас"""
        with self._lock:
            if self._chat_id is not None:
                return False
            self._save(chat_id)
            self._chat_id = chat_id

        logger.info(f"👤 Зарегистрирован чат владельца: {chat_id}")
        return True

    def _load(self) -> Optional[int]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding='utf-8') or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} must contain a JSON object")
        chat_id = data.get("chat_id")
        if chat_id is None:
            return None
        try:
            return int(chat_id)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"invalid chat_id in {self.path}: {e}") from e

    def _save(self, chat_id: int):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.path.with_suffix('.tmp')
            temp_file.write_text(json.dumps({"chat_id": chat_id}, indent=2), encoding='utf-8')
            temp_file.replace(self.path)
        except OSError as e:
            logger.error(f"❌ Не удалось сохранить чат владельца: {e}")
            raise PersistenceError(f"failed to write {self.path}: {e}") from e
