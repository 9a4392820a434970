from __future__ import annotations

import logging
import random
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .. import __version__, config
from ..config import Settings, get_settings
from ..quiz import Catalog, QuizEngine, list_codes, load_catalog, question_to_payload
from ..quiz.engine import Question
from ..quiz.errors import InsufficientDataError, NotFoundError, QuizError
from .models import QuestionResponse, VersionResponse

logger = logging.getLogger(__name__)

APP_NAME = "flag-quiz"


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def get_engine(request: Request) -> QuizEngine:
    return request.app.state.engine


def get_rng() -> random.Random:
    """Fresh generator per request so no state is shared between handlers."""
    return random.Random()


def _ask(engine: QuizEngine, rng: random.Random) -> Question:
    try:
        return engine.next_question(rng)
    except InsufficientDataError as exc:
        logger.warning("Cannot build question: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except NotFoundError as exc:
        logger.error("Missing quiz asset: %s", exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except QuizError as exc:
        logger.exception("Question generation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the service around a catalog loaded once up front.

    Catalog errors propagate so that a broken flag directory stops startup.
    """
    settings = settings or get_settings()
    catalog = load_catalog(settings.flag_dir)
    engine = QuizEngine(
        catalog,
        settings.asset_dir,
        option_count=settings.option_count,
        padded=settings.pad_base64,
    )

    app = FastAPI(
        title="Flag Quiz",
        version=__version__,
        description="Guess the country from its flag.",
    )
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.engine = engine
    templates = Jinja2Templates(directory=str(settings.template_dir))

    # ----------------------------------------------------------------- endpoints
    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version", response_model=VersionResponse)
    def version() -> VersionResponse:
        return VersionResponse(name=APP_NAME, version=__version__)

    @app.get("/list")
    def country_codes(catalog: Catalog = Depends(get_catalog)) -> List[str]:
        return list_codes(catalog)

    @app.get("/api/v1/quiz", response_model=QuestionResponse)
    def quiz_json(
        engine: QuizEngine = Depends(get_engine),
        rng: random.Random = Depends(get_rng),
    ) -> QuestionResponse:
        question = _ask(engine, rng)
        return QuestionResponse(**question_to_payload(question))

    @app.get("/quiz", response_class=HTMLResponse)
    def quiz_page(
        request: Request,
        engine: QuizEngine = Depends(get_engine),
        rng: random.Random = Depends(get_rng),
    ) -> HTMLResponse:
        question = _ask(engine, rng)
        return templates.TemplateResponse(
            request, config.QUIZ_TEMPLATE, question_to_payload(question)
        )

    @app.get("/")
    def landing() -> RedirectResponse:
        return RedirectResponse(url="/quiz")

    logger.info(
        "Flag quiz ready: %d countries, %d options per question",
        len(catalog),
        settings.option_count,
    )
    return app
