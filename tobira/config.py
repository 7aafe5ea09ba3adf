"""
Runtime configuration for Tobira.

Defaults live here as module constants. Each can be overridden through an
environment variable, optionally set in a .env file at the project root.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_PROGRESS_DIR = Path.home() / ".tobira"
DEFAULT_PROGRESS_PATH = DEFAULT_PROGRESS_DIR / "progress.json"
DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "books.yaml"
DEFAULT_REVEAL_SECONDS = 2.0
PROGRESS_KEY = "readingProgress"


@dataclass(frozen=True)
class Settings:
    progress_path: Path
    catalog_path: Path
    reveal_seconds: float


def _float_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def get_settings() -> Settings:
    """
    Build settings from the environment.

    Reads TOBIRA_PROGRESS_PATH, TOBIRA_CATALOG_PATH and TOBIRA_REVEAL_SECONDS.

    Raises:
        ValueError: If TOBIRA_REVEAL_SECONDS is not a non-negative number
    """
    progress_path = os.environ.get("TOBIRA_PROGRESS_PATH")
    catalog_path = os.environ.get("TOBIRA_CATALOG_PATH")
    return Settings(
        progress_path=Path(progress_path).expanduser() if progress_path else DEFAULT_PROGRESS_PATH,
        catalog_path=Path(catalog_path).expanduser() if catalog_path else DEFAULT_CATALOG_PATH,
        reveal_seconds=_float_from_env("TOBIRA_REVEAL_SECONDS", DEFAULT_REVEAL_SECONDS),
    )
