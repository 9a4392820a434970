from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flag_quiz import config  # noqa: E402
from flag_quiz.config import Settings  # noqa: E402

SAMPLE_COUNTRIES: Dict[str, str] = {
    "AD": "Andorra",
    "AE": "United Arab Emirates",
    "CH": "Switzerland",
    "DE": "Germany",
    "FR": "France",
    "GB": "United Kingdom",
    "GB-ENG": "England",
    "AQ": "Antarctica",
    "ZW": "Zimbabwe",
}


def write_png(path: Path, colour: str = "red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (4, 3), colour).save(path, format="PNG")
    return path


def make_flag_dir(root: Path, countries: Dict[str, str], with_flags: bool = True) -> Path:
    """Lay out a miniature copy of the country-flags repository."""
    root.mkdir(parents=True, exist_ok=True)
    (root / config.COUNTRIES_JSON).write_text(
        json.dumps(countries, ensure_ascii=False), encoding="utf-8"
    )
    png_dir = root / config.PNG_DIR
    png_dir.mkdir(exist_ok=True)
    if with_flags:
        for code in countries:
            write_png(png_dir / f"{code.lower()}.png")
    return root


@pytest.fixture
def flag_dir(tmp_path: Path) -> Path:
    return make_flag_dir(tmp_path / "country-flags", SAMPLE_COUNTRIES)


@pytest.fixture
def settings(flag_dir: Path) -> Settings:
    return Settings(flag_dir=flag_dir, template_dir=config.DEFAULT_TEMPLATE_DIR)
