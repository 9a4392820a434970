from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping

from .. import config
from .errors import CatalogNotFoundError, CatalogParseError, QuizIOError

logger = logging.getLogger(__name__)

CODE_LENGTH = 2


@dataclass(frozen=True, eq=False)
class Catalog(Mapping[str, str]):
    """Read-only ``code -> name`` mapping of the countries eligible for a quiz."""

    countries: Mapping[str, str]
    source: Path = field(default=Path("."), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "countries", MappingProxyType(dict(self.countries)))

    def __getitem__(self, code: str) -> str:
        return self.countries[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self.countries)

    def __len__(self) -> int:
        return len(self.countries)

    @property
    def flag_dir(self) -> Path:
        return self.source.parent

    @property
    def asset_dir(self) -> Path:
        return self.flag_dir / config.PNG_DIR


def read_country_file(path: Path) -> Dict[str, str]:
    if not path.is_file():
        raise CatalogNotFoundError(f"Country metadata missing at {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise CatalogParseError(f"Malformed JSON in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise CatalogParseError(f"{path} is not UTF-8 encoded") from exc
    except OSError as exc:
        raise QuizIOError(f"Failed to read {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise CatalogParseError(f"{path} must contain a JSON object of code -> name")

    for code, name in payload.items():
        if not isinstance(name, str):
            raise CatalogParseError(
                f"Country name for {code!r} must be a string, got {type(name).__name__}"
            )
    return payload


def filter_countries(countries: Mapping[str, str]) -> Dict[str, str]:
    # Subdivision codes such as "GB-ENG" are longer than two characters.
    kept = {code: name for code, name in countries.items() if len(code) == CODE_LENGTH}
    for code in config.EXCLUDED_CODES:
        kept.pop(code, None)
    return kept


def load_catalog(flag_dir: Path) -> Catalog:
    source = Path(flag_dir) / config.COUNTRIES_JSON
    raw = read_country_file(source)
    countries = filter_countries(raw)
    logger.info(
        "Loaded %d countries from %s (dropped %d)",
        len(countries),
        source,
        len(raw) - len(countries),
    )
    return Catalog(countries, source=source)


def list_codes(catalog: Mapping[str, str]) -> List[str]:
    return sorted(catalog)
