"""
main.py — Algorithm Replay Engine Flask App
============================================
JSON API over one in-memory Workspace.

Routes:
  GET  /api/operations         – every runnable operation with its pseudocode
  GET  /api/state              – full session snapshot
  GET  /api/export             – last run: inputs, metrics, every step
  POST /api/run                – execute an operation, load its trace
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N (-1 = before the first)
  POST /api/step/play          – start auto-play (optional speed preset)
  POST /api/step/pause         – stop auto-play
  POST /api/step/tick          – let the logical timer advance if due
  POST /api/history/undo       – previous state
  POST /api/history/redo       – next state
  POST /api/data/sample        – load sample data for a concept
  POST /api/data/load          – load user text (graphs: adjacency list or matrix)
  POST /api/data/reset         – empty a concept
  POST /api/grid/wall          – toggle one wall cell

Errors:
  malformed body / bad value / step index out of range   → 400
  unknown operation or concept                            → 404
"""

import logging
from http import HTTPStatus
from typing import Any, Literal, Optional, Type, TypeVar

from flask import Flask, jsonify, request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import HTTPException

from engine.workspace import (
    OPERATIONS, UnknownConceptError, UnknownOperationError, Workspace, plain_result,
)
from settings import VisualizerSettings


LOGGER = logging.getLogger(__name__)

Body = TypeVar("Body", bound=BaseModel)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------
class RunRequest(BaseModel):
    op_key: str
    value:  Any           = None
    key:    Optional[str] = None


class GotoRequest(BaseModel):
    index: int


class ClockRequest(BaseModel):
    now: Optional[float] = None


class PlayRequest(ClockRequest):
    speed: Optional[str] = None


class ConceptRequest(BaseModel):
    concept: str


class SampleRequest(ConceptRequest):
    seed: Optional[int] = None


class LoadRequest(ConceptRequest):
    raw:    str
    layout: Literal["list", "matrix"] = "list"   # graph text only


class WallRequest(BaseModel):
    row: int
    col: int


def _body(model: Type[Body]) -> Body:
    return model.model_validate(request.get_json(silent=True) or {})


def _error(message: str, status: HTTPStatus, **extra):
    return jsonify({"error": message, **extra}), status


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Optional[VisualizerSettings] = None) -> Flask:
    settings = settings or VisualizerSettings()
    app = Flask(__name__)
    workspace = Workspace(settings)
    app.extensions["workspace"] = workspace

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------
    @app.errorhandler(ValidationError)
    def on_validation_error(exc: ValidationError):
        details = [{"loc": [str(p) for p in e["loc"]], "msg": e["msg"]} for e in exc.errors()]
        LOGGER.warning("Rejected request body on %s: %s", request.path, details)
        return _error("Invalid request body", HTTPStatus.BAD_REQUEST, details=details)

    @app.errorhandler(UnknownOperationError)
    @app.errorhandler(UnknownConceptError)
    def on_unknown(exc: ValueError):
        LOGGER.warning("%s", exc)
        return _error(str(exc), HTTPStatus.NOT_FOUND)

    @app.errorhandler(ValueError)
    @app.errorhandler(IndexError)
    def on_bad_input(exc: Exception):
        LOGGER.warning("Rejected input on %s: %s", request.path, exc)
        return _error(str(exc), HTTPStatus.BAD_REQUEST)

    @app.errorhandler(Exception)
    def on_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return _error(exc.description, HTTPStatus(exc.code))
        LOGGER.exception("Unhandled error on %s", request.path)
        return _error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)

    # ------------------------------------------------------------------
    # Read-only
    # ------------------------------------------------------------------
    @app.get("/api/operations")
    def api_operations():
        return jsonify([op.to_dict() for op in OPERATIONS.values()])

    @app.get("/api/state")
    def api_state():
        return jsonify(workspace.snapshot())

    @app.get("/api/export")
    def api_export():
        if workspace.recorder is None:
            return _error("Nothing has been run yet", HTTPStatus.NOT_FOUND)
        return jsonify(workspace.recorder.export())

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    @app.post("/api/run")
    def api_run():
        body = _body(RunRequest)
        trace = workspace.run(body.op_key, value=body.value, key=body.key)
        return jsonify({
            "steps":    [s.to_dict() for s in trace.steps],
            "result":   plain_result(trace.result),
            "snapshot": workspace.snapshot(),
        })

    # ------------------------------------------------------------------
    # Step navigation
    # ------------------------------------------------------------------
    stepper = workspace.stepper

    def playback(moved: bool):
        return jsonify({"moved": moved, **stepper.to_dict()})

    @app.post("/api/step/next")
    def api_step_next():
        return playback(stepper.next_step())

    @app.post("/api/step/prev")
    def api_step_prev():
        return playback(stepper.prev_step())

    @app.post("/api/step/goto")
    def api_step_goto():
        stepper.goto_step(_body(GotoRequest).index)
        return playback(True)

    @app.post("/api/step/play")
    def api_step_play():
        body = _body(PlayRequest)
        if body.speed is not None:
            stepper.set_speed(body.speed)
        return playback(stepper.play(body.now))

    @app.post("/api/step/pause")
    def api_step_pause():
        stepper.pause()
        return playback(False)

    @app.post("/api/step/tick")
    def api_step_tick():
        return playback(stepper.tick(_body(ClockRequest).now))

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    @app.post("/api/history/undo")
    def api_history_undo():
        moved = workspace.undo()
        return jsonify({"moved": moved, **workspace.snapshot()})

    @app.post("/api/history/redo")
    def api_history_redo():
        moved = workspace.redo()
        return jsonify({"moved": moved, **workspace.snapshot()})

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    @app.post("/api/data/sample")
    def api_data_sample():
        body = _body(SampleRequest)
        workspace.load_sample(body.concept, body.seed)
        return jsonify(workspace.snapshot())

    @app.post("/api/data/load")
    def api_data_load():
        body = _body(LoadRequest)
        workspace.load_values(body.concept, body.raw, body.layout)
        return jsonify(workspace.snapshot())

    @app.post("/api/data/reset")
    def api_data_reset():
        workspace.reset_concept(_body(ConceptRequest).concept)
        return jsonify(workspace.snapshot())

    @app.post("/api/grid/wall")
    def api_grid_wall():
        body = _body(WallRequest)
        workspace.toggle_wall((body.row, body.col))
        return jsonify(workspace.snapshot())

    return app


def main() -> None:
    settings = VisualizerSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    LOGGER.info("Starting replay engine on http://%s:%d", settings.host, settings.port)
    create_app(settings).run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
