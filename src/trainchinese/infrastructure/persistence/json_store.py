"""
JSON Known-Items Repository. Infrastructure adapter for the save file.

Implements KnownItemsRepository on top of a pretty-printed JSON list.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from trainchinese.domain.errors import SnapshotError
from trainchinese.domain.models import Item
from trainchinese.domain.ports import KnownItemsRepository

from .schema import ItemRecord, item_from_record, item_to_record

logger = logging.getLogger(__name__)

_SNAPSHOT = TypeAdapter(list[ItemRecord])


class JsonKnownItemsRepository(KnownItemsRepository):
    """
    Stores known items, with full review history, in a single JSON file.

    A missing file loads as an empty map. A malformed file is rejected as a
    whole with SnapshotError.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> dict[str, Item]:
        if not self.path.exists():
            logger.info(f"No save file at {self.path}; starting fresh")
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Cannot read {self.path}: {e}") from e

        try:
            records = _SNAPSHOT.validate_python(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot {self.path}: {e}") from e

        items: dict[str, Item] = {}
        for record in records:
            if record.id in items:
                raise SnapshotError(f"Duplicate item id {record.id!r} in {self.path}")
            items[record.id] = item_from_record(record)

        logger.debug(f"Loaded {len(items)} known items from {self.path}")
        return items

    def save(self, items: dict[str, Item]) -> None:
        payload = [item_to_record(item).model_dump(mode="json") for item in items.values()]
        text = json.dumps(payload, indent=4, ensure_ascii=False)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Data saved successfully to {self.path}")
