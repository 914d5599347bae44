"""ASGI application for Pictoboard."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, List, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from pictoboard import __version__, metrics
from pictoboard.config import Settings, get_settings
from pictoboard.llm.client import build_remote_suggester
from pictoboard.logging_utils import configure_logging as configure_app_logging
from pictoboard.models.sentence import MAX_SENTENCE_LENGTH
from pictoboard.models.word import Word
from pictoboard.server import deps
from pictoboard.suggest.cache import SuggestionCache
from pictoboard.suggest.circuit_breaker import CircuitBreaker
from pictoboard.suggest.orchestrator import SuggestionOrchestrator
from pictoboard.suggest.rule_engine import RuleEngine
from pictoboard.vocabulary.repository import JsonVocabularyRepository

logger = logging.getLogger(__name__)


class SuggestionRequest(BaseModel):
    word_ids: List[str] = Field(default_factory=list, max_length=MAX_SENTENCE_LENGTH)
    location: Optional[str] = Field(default=None, min_length=1, max_length=64)


class SuggestionResponse(BaseModel):
    suggestions: List[Word]
    is_loading: bool
    source: str
    templates: List[str] = Field(default_factory=list)
    template_fills: List[Word] = Field(default_factory=list)


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.llm_api_key or ""])


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Pictoboard Suggestions", version=__version__)
    application.state.settings = settings
    application.state.vocabulary = JsonVocabularyRepository.from_path(settings.vocabulary_path)
    application.state.remote = build_remote_suggester()
    application.state.rule_engine = RuleEngine()
    application.state.cache = SuggestionCache(settings.cache_size)
    application.state.breaker = CircuitBreaker(
        failure_threshold=settings.breaker_threshold,
        cooldown_seconds=settings.breaker_cooldown_s,
    )
    logger.debug(
        "Application created with %d words, remote=%s",
        len(application.state.vocabulary),
        "enabled" if application.state.remote is not None else "disabled",
    )

    if settings.log_requests:
        access_logger = logging.getLogger("pictoboard.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details and record request metrics."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_errors(exc.errors())},
        )

    @application.get("/health", summary="Service health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @application.get("/vocabulary", response_model=list[Word], summary="List vocabulary words")
    def vocabulary_list(
        location: Optional[str] = Query(default=None, min_length=1, max_length=64),
        search: Optional[str] = Query(default=None, min_length=1, max_length=64),
        repository=Depends(deps.get_vocabulary_repository),
    ) -> list[Word]:
        if search:
            words = repository.search_words(search)
            if location:
                words = [word for word in words if word.belongs_to_location(location)]
            return words
        if location:
            return repository.get_words_by_location(location)
        return repository.get_all_words()

    @application.get(
        "/vocabulary/{word_id}",
        response_model=Word,
        summary="Fetch a single vocabulary word",
    )
    def vocabulary_detail(
        word_id: str,
        repository=Depends(deps.get_vocabulary_repository),
    ) -> Word:
        word = repository.get_word_by_id(word_id)
        if word is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown word '{word_id}'")
        return word

    @application.post(
        "/suggestions",
        response_model=SuggestionResponse,
        summary="Suggest the next words for a sentence",
    )
    async def suggestions_endpoint(
        payload: SuggestionRequest,
        repository=Depends(deps.get_vocabulary_repository),
        remote=Depends(deps.get_remote_suggester),
        cache: SuggestionCache = Depends(deps.get_suggestion_cache),
        breaker: CircuitBreaker = Depends(deps.get_circuit_breaker),
        rule_engine: RuleEngine = Depends(deps.get_rule_engine),
    ) -> SuggestionResponse:
        sentence: list[Word] = []
        unknown: list[str] = []
        for word_id in payload.word_ids:
            word = repository.get_word_by_id(word_id)
            if word is None:
                unknown.append(word_id)
            else:
                sentence.append(word)
        if unknown:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Unknown word ids: {', '.join(unknown)}",
            )

        if payload.location:
            vocabulary = repository.get_words_by_location(payload.location)
        else:
            vocabulary = repository.get_all_words()

        # Clients debounce typing themselves, so each request resolves immediately.
        # Cached remote results are only reused for the same location.
        orchestrator = SuggestionOrchestrator(
            rule_engine=rule_engine,
            remote=remote,
            cache=cache,
            breaker=breaker,
            debounce_seconds=0.0,
            timeout_seconds=settings.remote_timeout,
            cache_scope=payload.location,
        )
        state = await orchestrator.resolve(sentence, vocabulary)
        return SuggestionResponse(
            suggestions=state.suggestions,
            is_loading=state.is_loading,
            source=orchestrator.source.value,
            templates=[template.label for template in rule_engine.match_templates(sentence)],
            template_fills=rule_engine.template_fills(sentence, vocabulary),
        )

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return application


def jsonable_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    normalized: list[dict[str, Any]] = []
    for error in errors:
        normalized.append(
            {
                key: value if isinstance(value, (str, int, float, bool, list)) or value is None else repr(value)
                for key, value in error.items()
            }
        )
    return normalized


__all__ = ["SuggestionRequest", "SuggestionResponse", "create_app"]
