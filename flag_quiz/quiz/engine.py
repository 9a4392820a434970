from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .. import config
from .assets import encode_flag
from .errors import InsufficientDataError
from .utils import sample_without_replacement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    flag: str = ""

    @property
    def has_flag(self) -> bool:
        return bool(self.flag)

    def to_dict(self) -> Dict[str, str]:
        return {"cca2": self.code, "name": self.name, "flag": self.flag}


@dataclass(frozen=True)
class Question:
    country: Country
    options: Sequence[Country]

    @property
    def correct_code(self) -> str:
        for option in self.options:
            if option.has_flag:
                return option.code
        raise ValueError("Question has no option carrying a flag")


def build_options(
    countries: Mapping[str, str], target: Country, codes: Sequence[str]
) -> List[Country]:
    """Combine the target with flagless distractors, ordered by country code."""
    options = [target]
    for code in codes:
        options.append(Country(code=code, name=countries[code]))
    return sorted(options, key=lambda option: option.code)


def generate_question(
    countries: Mapping[str, str],
    asset_dir: Path,
    rng: random.Random,
    option_count: int = config.DEFAULT_OPTION_COUNT,
    padded: bool = False,
) -> Question:
    if option_count < 1:
        raise InsufficientDataError(f"Option count must be positive, got {option_count}")
    if len(countries) < option_count:
        raise InsufficientDataError(
            f"Need at least {option_count} countries, catalog has {len(countries)}"
        )

    codes = sorted(countries)
    index = rng.randrange(len(codes))
    code = codes.pop(index)
    target = Country(
        code=code,
        name=countries[code],
        flag=encode_flag(code, asset_dir, padded=padded),
    )

    distractors = sample_without_replacement(codes, option_count - 1, rng)
    options = build_options(countries, target, distractors)
    logger.debug("Question for %s with options %s", code, [o.code for o in options])
    return Question(country=target, options=tuple(options))


class QuizEngine:
    def __init__(
        self,
        countries: Mapping[str, str],
        asset_dir: Path,
        option_count: int = config.DEFAULT_OPTION_COUNT,
        padded: bool = False,
    ) -> None:
        if option_count <= 0:
            raise ValueError("Option count must be positive")

        self.countries = countries
        self.asset_dir = Path(asset_dir)
        self.option_count = option_count
        self.padded = padded

    def next_question(
        self, rng: Optional[random.Random] = None, seed: Optional[int] = None
    ) -> Question:
        if rng is None:
            rng = random.Random(seed)
        return generate_question(
            self.countries,
            self.asset_dir,
            rng,
            option_count=self.option_count,
            padded=self.padded,
        )


def question_to_payload(question: Question) -> Dict[str, object]:
    return {
        "country": question.country.to_dict(),
        "options": [option.to_dict() for option in question.options],
    }
