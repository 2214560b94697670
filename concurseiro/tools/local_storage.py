"""Key/value local storage and plan collection I/O."""
import logging
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter

from concurseiro import config
from concurseiro.models.plan import StudyPlan, check_unique_ids

logger = logging.getLogger(__name__)

PLANS_KEY = "concurseiro_plans"

_plans_adapter = TypeAdapter(list[StudyPlan])


class LocalStorage:
    """String values keyed by name, one JSON file per key under ``root``."""

    def __init__(self, root: Path):
        self.root = root

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never set."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Store value atomically (write temp then replace)."""
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(value, encoding="utf-8")
        temp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def default_storage() -> LocalStorage:
    return LocalStorage(config.state_dir())


def dump_plans(plans: list[StudyPlan]) -> str:
    """Serialize the plan collection to a JSON array."""
    return _plans_adapter.dump_json(plans, indent=2).decode("utf-8")


def parse_plans(raw: str) -> list[StudyPlan]:
    """Parse a stored collection. Raises ValueError on duplicate plan ids."""
    plans = _plans_adapter.validate_json(raw)
    check_unique_ids(plans, "plan")
    return plans


def load_plans(storage: LocalStorage, key: str = PLANS_KEY) -> list[StudyPlan]:
    """Load the plan collection. Missing or unreadable data yields []."""
    try:
        raw = storage.get_item(key)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read saved plans: %s", e)
        return []
    if raw is None:
        return []

    try:
        return parse_plans(raw)
    except ValueError as e:
        logger.error("Failed to parse saved plans: %s", e)
        return []


def save_plans(plans: list[StudyPlan], storage: LocalStorage, key: str = PLANS_KEY) -> None:
    storage.set_item(key, dump_plans(plans))
