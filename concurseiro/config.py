"""Paths and settings read from the environment."""
import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_STATE_DIR = PROJECT_ROOT / "storage" / "state"
DEFAULT_MODEL = "gemini-2.5-flash"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def state_dir() -> Path:
    """Directory backing local storage (CONCURSEIRO_STATE_DIR overrides)."""
    override = os.getenv("CONCURSEIRO_STATE_DIR")
    return Path(override) if override else DEFAULT_STATE_DIR


def model_name() -> str:
    return os.getenv("CONCURSEIRO_MODEL") or DEFAULT_MODEL


def api_key() -> str | None:
    return os.getenv("GOOGLE_API_KEY")
