from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATE_DIR = BASE_DIR / "templates"

COUNTRIES_JSON = "countries.json"
PNG_DIR = "png250px"
PNG_EXTENSION = ".png"
QUIZ_TEMPLATE = "quiz.html"

DEFAULT_OPTION_COUNT = 4
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
MAX_PORT = 32768

# Regions, territories and codes whose flag duplicates another country's.
EXCLUDED_CODES = frozenset(
    {
        "AQ", "BL", "BQ", "BV", "EU", "GF", "GP", "GU", "HM", "LU", "MC", "MF",
        "MQ", "PM", "RE", "SH", "SJ", "TD", "TF", "UM", "VI", "XK", "YT",
    }
)


def _env_flag(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).lower() in {"1", "true", "yes"}


class Settings:
    """Centralised runtime configuration."""

    def __init__(
        self,
        flag_dir: Optional[Path] = None,
        template_dir: Optional[Path] = None,
        option_count: Optional[int] = None,
        pad_base64: Optional[bool] = None,
    ) -> None:
        if flag_dir is None:
            flag_dir = Path(os.environ.get("FLAG_QUIZ_FLAG_DIR", "country-flags"))
        if template_dir is None:
            template_dir = Path(
                os.environ.get("FLAG_QUIZ_TEMPLATE_DIR", str(DEFAULT_TEMPLATE_DIR))
            )
        if option_count is None:
            option_count = int(
                os.environ.get("FLAG_QUIZ_OPTION_COUNT", DEFAULT_OPTION_COUNT)
            )
        if pad_base64 is None:
            pad_base64 = _env_flag("FLAG_QUIZ_PAD_BASE64")

        self.flag_dir = Path(flag_dir).resolve()
        self.template_dir = Path(template_dir).resolve()
        self.option_count = option_count
        self.pad_base64 = pad_base64

    @property
    def countries_path(self) -> Path:
        return self.flag_dir / COUNTRIES_JSON

    @property
    def asset_dir(self) -> Path:
        return self.flag_dir / PNG_DIR


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
