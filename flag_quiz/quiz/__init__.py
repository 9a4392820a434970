"""Question generation for the flag quiz."""

from .catalog import Catalog, filter_countries, list_codes, load_catalog
from .engine import Country, Question, QuizEngine, generate_question, question_to_payload

__all__ = [
    "Catalog",
    "Country",
    "Question",
    "QuizEngine",
    "filter_countries",
    "generate_question",
    "list_codes",
    "load_catalog",
    "question_to_payload",
]
