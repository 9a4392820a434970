from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class CountryOption(BaseModel):
    cca2: str = Field(..., description="Two-letter country code")
    name: str = Field(..., description="Display name of the country")
    flag: str = Field(
        default="",
        description="Base64 PNG of the flag; only set on the correct answer",
    )


class QuestionResponse(BaseModel):
    country: CountryOption
    options: List[CountryOption] = Field(
        default_factory=list, description="Options sorted by country code"
    )


class VersionResponse(BaseModel):
    name: str
    version: str
