from __future__ import annotations

import contextlib
from http import HTTPStatus
from typing import TYPE_CHECKING, cast

import structlog
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from ledger.exceptions import (
    DuplicatePlayerError,
    IncompleteSelectionError,
    LedgerError,
    ScoreConservationError,
    UnknownGameError,
    UnknownPlayerError,
)
from ledger.service import LedgerService
from server import handlers
from server.handlers import BadRequestError
from server.settings import LedgerServerSettings
from shared.build_info import APP_VERSION, GIT_COMMIT
from shared.db import Database, SqliteGameRepository, SqlitePlayerRepository, SqliteSettingsRepository
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request


def _ledger_error_body(exc: LedgerError) -> dict:
    body: dict = {"error": str(exc)}
    if isinstance(exc, ScoreConservationError):
        body["total"] = exc.total
        body["expected"] = exc.expected
    elif isinstance(exc, IncompleteSelectionError):
        body["missing_seats"] = list(exc.missing_seats)
        body["invalid_seats"] = list(exc.invalid_seats)
    elif isinstance(exc, DuplicatePlayerError):
        body["player_id"] = exc.player_id
        body["seats"] = list(exc.seats)
    return body


async def _ledger_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert domain errors into JSON responses: unknown records are 404, everything else 422."""
    ledger_exc = cast("LedgerError", exc)
    if isinstance(ledger_exc, (UnknownPlayerError, UnknownGameError)):
        status = HTTPStatus.NOT_FOUND
    else:
        status = HTTPStatus.UNPROCESSABLE_ENTITY
    logger.info("rejected request", path=request.url.path, error=type(exc).__name__)
    return JSONResponse(_ledger_error_body(ledger_exc), status_code=status)


async def _bad_request_handler(_request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(
            {
                "error": "Invalid request",
                "details": exc.errors(include_url=False, include_context=False, include_input=False),
            },
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        )
    return JSONResponse({"error": str(exc)}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": APP_VERSION, "commit": GIT_COMMIT})


def create_app(settings: LedgerServerSettings | None = None) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = LedgerServerSettings()

    routes = [
        Route("/health", health, methods=["GET"], name="health"),
        Route("/players", handlers.list_players, methods=["GET"], name="list_players"),
        Route("/players", handlers.create_player, methods=["POST"], name="create_player"),
        Route("/players/{player_id}", handlers.get_player, methods=["GET"], name="get_player"),
        Route("/players/{player_id}", handlers.rename_player, methods=["PATCH"], name="rename_player"),
        Route("/players/{player_id}", handlers.delete_player, methods=["DELETE"], name="delete_player"),
        Route("/settings", handlers.get_settings, methods=["GET"], name="get_settings"),
        Route("/settings", handlers.update_settings, methods=["PUT"], name="update_settings"),
        Route("/games", handlers.list_games, methods=["GET"], name="list_games"),
        Route("/games", handlers.record_game, methods=["POST"], name="record_game"),
        Route("/games/preview", handlers.preview_game, methods=["POST"], name="preview_game"),
        Route("/games/{game_id}", handlers.get_game, methods=["GET"], name="get_game"),
        Route("/games/{game_id}", handlers.delete_game, methods=["DELETE"], name="delete_game"),
        Route("/session", handlers.session_totals, methods=["POST"], name="session_totals"),
        Route("/export", handlers.export_ledger, methods=["GET"], name="export_ledger"),
        Route("/export/history", handlers.export_history, methods=["GET"], name="export_history"),
    ]

    db = Database(settings.database_path)
    db.connect()
    db.migrate_from_export(settings.legacy_export_file)
    ledger_service = LedgerService(
        SqlitePlayerRepository(db),
        SqliteGameRepository(db),
        SqliteSettingsRepository(db),
    )

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:  # pragma: no cover
        yield
        db.close()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={
            LedgerError: _ledger_error_handler,
            ValidationError: _bad_request_handler,
            BadRequestError: _bad_request_handler,
        },
    )
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.state.db = db
    app.state.settings = settings
    app.state.ledger_service = ledger_service

    logger.info("ledger server ready", database=settings.database_path)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory server.app:get_app."""
    s = LedgerServerSettings()
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s)
