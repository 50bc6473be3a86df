"""
Settings and logging setup shared by the web app and the scripts.

Values come from the environment, optionally seeded from a .env file.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional
from datetime import datetime
from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///garage_crm.db"

def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")

@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    fio_max_distance: int = 3
    phone_min_digits: int = 10
    plate_lookalike_aware: bool = False
    log_level: str = "INFO"
    log_dir: Optional[str] = None

def get_settings() -> Settings:
    """Build settings from environment variables (.env is loaded first)."""
    load_dotenv()
    return Settings(
        database_url=os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
        fio_max_distance=int(os.environ.get("FIO_MAX_DISTANCE", 3)),
        phone_min_digits=int(os.environ.get("PHONE_MIN_DIGITS", 10)),
        plate_lookalike_aware=_env_bool("PLATE_LOOKALIKE_AWARE", False),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        log_dir=os.environ.get("LOG_DIR") or None
    )

def setup_logging(settings: Settings):
    handlers = [logging.StreamHandler()]
    if settings.log_dir:
        if not os.path.exists(settings.log_dir):
            os.makedirs(settings.log_dir)
        log_filename = os.path.join(
            settings.log_dir, f'garage_crm_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        )
        handlers.append(logging.FileHandler(log_filename, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - [%(funcName)s] %(message)s',
        handlers=handlers
    )
