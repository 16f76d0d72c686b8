# database/json_store.py

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Union

from shared.errors import PersistenceError

logger = logging.getLogger(__name__)


class JsonFileCollection:
    """Коллекция записей, хранимая целиком в одном JSON-файле (массив)"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[Any]:
        """Загрузка коллекции; отсутствующий или пустой файл - пустая коллекция"""
        if not self.path.exists():
            logger.info(f"📂 Файл {self.path} не найден, начинаем с пустой коллекции")
            return []

        try:
            raw = self.path.read_text(encoding='utf-8')
        except OSError as e:
            raise PersistenceError(f"failed to read {self.path}: {e}") from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(f"{self.path} must contain a JSON array")

        logger.info(f"📂 Загружено {len(data)} записей из {self.path}")
        return data

    def save(self, records: List[Any]) -> None:
        """Полная перезапись файла через временный файл"""
        temp_file = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(records, ensure_ascii=False, indent=2)
            with open(temp_file, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            temp_file.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Ошибка сохранения {self.path}: {e}")
            raise PersistenceError(f"failed to write {self.path}: {e}") from e

        logger.debug(f"💾 {self.path}: сохранено {len(records)} записей")
