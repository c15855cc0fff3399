"""JSON handlers for players, settings, games, sessions, and export."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from starlette.responses import JSONResponse, Response

from ledger.export import ExportKind, export_filename, render_export
from ledger.money import format_money
from server.types import GameEntryRequest, PlayerNameRequest, SessionRequest, UpdateSettingsRequest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic import BaseModel
    from starlette.requests import Request

    from ledger.export import HistoryExport
    from ledger.service import LedgerService


class BadRequestError(Exception):
    """Request body is not valid JSON."""


def _service(request: Request) -> LedgerService:
    return request.app.state.ledger_service


async def _read_json(request: Request) -> Any:  # noqa: ANN401
    """Decode the request body; an empty body reads as an empty object."""
    raw_body = await request.body()
    if not raw_body or raw_body.strip() == b"":
        return {}
    try:
        return json.loads(raw_body)
    except ValueError as e:
        raise BadRequestError("Invalid JSON body") from e


def _dump(records: Iterable[BaseModel]) -> list[dict]:
    return [r.model_dump(mode="json") for r in records]


# -- players --


async def list_players(request: Request) -> JSONResponse:
    players = await _service(request).list_players()
    return JSONResponse({"players": _dump(players)})


async def create_player(request: Request) -> JSONResponse:
    req = PlayerNameRequest.model_validate(await _read_json(request))
    player = await _service(request).register_player(req.name)
    return JSONResponse(player.model_dump(mode="json"), status_code=201)


async def get_player(request: Request) -> JSONResponse:
    player = await _service(request).get_player(request.path_params["player_id"])
    return JSONResponse(player.model_dump(mode="json"))


async def rename_player(request: Request) -> JSONResponse:
    req = PlayerNameRequest.model_validate(await _read_json(request))
    player = await _service(request).rename_player(request.path_params["player_id"], req.name)
    return JSONResponse(player.model_dump(mode="json"))


async def delete_player(request: Request) -> Response:
    await _service(request).delete_player(request.path_params["player_id"])
    return Response(status_code=204)


# -- settings --


async def get_settings(request: Request) -> JSONResponse:
    settings = await _service(request).get_settings()
    return JSONResponse(settings.model_dump(mode="json"))


async def update_settings(request: Request) -> JSONResponse:
    req = UpdateSettingsRequest.model_validate(await _read_json(request))
    settings = await _service(request).update_settings(req.preset, uma=req.uma, point_value=req.point_value)
    return JSONResponse(settings.model_dump(mode="json"))


# -- games --


async def list_games(request: Request) -> JSONResponse:
    games = await _service(request).list_games()
    return JSONResponse({"games": _dump(games)})


async def preview_game(request: Request) -> JSONResponse:
    req = GameEntryRequest.model_validate(await _read_json(request))
    results = await _service(request).preview_game(req.player_ids, req.scores)
    return JSONResponse(
        {"results": [r.model_dump(mode="json") | {"display_money": format_money(r.money)} for r in results]},
    )


async def record_game(request: Request) -> JSONResponse:
    req = GameEntryRequest.model_validate(await _read_json(request))
    game = await _service(request).record_game(req.player_ids, req.scores)
    return JSONResponse(game.model_dump(mode="json"), status_code=201)


async def get_game(request: Request) -> JSONResponse:
    game = await _service(request).get_game(request.path_params["game_id"])
    return JSONResponse(game.model_dump(mode="json"))


async def delete_game(request: Request) -> Response:
    await _service(request).delete_game(request.path_params["game_id"])
    return Response(status_code=204)


# -- session --


async def session_totals(request: Request) -> JSONResponse:
    req = SessionRequest.model_validate(await _read_json(request))
    totals = await _service(request).session_totals(req.game_ids)
    return JSONResponse(
        {"totals": [t.model_dump(mode="json") | {"display_total": format_money(t.total_money)} for t in totals]},
    )


# -- export --


def _download(document: HistoryExport, kind: ExportKind) -> Response:
    filename = export_filename(kind, document.export_date)
    return Response(
        render_export(document),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def export_ledger(request: Request) -> Response:
    return _download(await _service(request).export_ledger(), ExportKind.LEDGER)


async def export_history(request: Request) -> Response:
    return _download(await _service(request).export_history(), ExportKind.HISTORY)
