"""
main.py — Algorithm Visualizer Flask App
==========================================
JSON API in front of the playback controllers.  A browser front-end polls
`/state` and redraws from it; all animation timing lives server-side.

Routes (<domain> is one of: sort, search, knapsack):
  GET  /                              – domains and their algorithms
  GET  /api/algorithms/<domain>       – catalog for one domain
  GET  /api/<domain>/state            – current playback state (for polling)
  POST /api/<domain>/select           – {key}    pick the algorithm
  POST /api/<domain>/start            – start a run (auto or manual)
  POST /api/<domain>/step             – manual mode: advance one step
  POST /api/<domain>/reset            – stop and regenerate the input
  POST /api/<domain>/cancel           – stop, keep the current picture
  POST /api/<domain>/speed            – {speed}  ms or preset name
  POST /api/<domain>/mode             – {manual} toggle manual stepping
  POST /api/<domain>/load             – {state}  user-supplied input
  POST /api/search/grid/wall          – {row, col} toggle a wall
  POST /api/<domain>/record           – {key}    full recorded run

State management:
  Each browser session gets a token; the token maps to an in-memory
  Workspace holding one PolledScheduler and one controller per domain.
  At most MAX_WORKSPACES are kept; the least recently used one is
  cleaned up and dropped when a new session arrives.
  Auto-play advances whenever the scheduler is pumped, which happens at
  the top of every request for that workspace, under the workspace lock.
"""

import logging
import math
import secrets
import sys
import threading
from collections import OrderedDict
from functools import partial
from typing import Any, Callable, Dict, Optional, Tuple

from flask import Flask, current_app, g, jsonify, request, session

from algorithms import DOMAINS, Domain, get_domain
from board import CellType, Item, new_board, new_grid, random_array, random_items, toggle_wall
from engine import PlaybackController, PolledScheduler, Recorder, SPEED_PRESETS

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "ARRAY_LENGTH":   6,
    "GRID_ROWS":      12,
    "GRID_COLS":      15,
    "ITEM_COUNT":     5,
    "CAPACITY":       15,
    "MAX_CAPACITY":   100,
    "MAX_WORKSPACES": 256,
}


# ---------------------------------------------------------------------------
# Workspace — everything one browser session owns
# ---------------------------------------------------------------------------
class Workspace:
    """
    One scheduler and one controller per domain.  `lock` is held for the
    whole of every request that touches the workspace, pump included, so
    the controllers only ever see one thread at a time.
    """

    def __init__(self, factories: Dict[str, Callable[[], Any]]):
        self.lock      = threading.Lock()
        self.scheduler = PolledScheduler()
        self.controllers: Dict[str, PlaybackController] = {
            key: PlaybackController(domain, self.scheduler, state_factory=factories[key])
            for key, domain in DOMAINS.items()
        }

    def pump(self) -> None:
        self.scheduler.pump()

    def cleanup(self) -> None:
        for ctl in self.controllers.values():
            ctl.cleanup()


class WorkspaceHub:
    """Session token → Workspace, least-recently-used first, at most `max_size` entries."""

    def __init__(self, max_size: int):
        self.max_size = max(1, int(max_size))
        self._lock = threading.Lock()
        self._workspaces: "OrderedDict[str, Workspace]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._workspaces)

    def __contains__(self, token: object) -> bool:
        return token in self._workspaces

    def peek(self, token: str) -> Optional[Workspace]:
        return self._workspaces.get(token)

    def get(self, token: Optional[str]) -> Optional[Workspace]:
        """Workspace for `token`, marked as most recently used."""
        with self._lock:
            workspace = self._workspaces.get(token) if token else None
            if workspace is not None:
                self._workspaces.move_to_end(token)
            return workspace

    def create(self, factories: Dict[str, Callable[[], Any]]) -> Tuple[str, Workspace]:
        with self._lock:
            token = secrets.token_hex(8)
            workspace = Workspace(factories)
            self._workspaces[token] = workspace
            self._evict(keep=token)
        logger.debug("Created workspace %s (%d live)", token, len(self._workspaces))
        return token, workspace

    def _evict(self, keep: str) -> None:
        # busy workspaces are skipped; the map may briefly exceed max_size
        for token in list(self._workspaces):
            if len(self._workspaces) <= self.max_size:
                return
            if token == keep:
                continue
            victim = self._workspaces[token]
            if not victim.lock.acquire(blocking=False):
                continue
            try:
                victim.cleanup()
            finally:
                victim.lock.release()
            del self._workspaces[token]
            logger.debug("Evicted idle workspace %s", token)


def _state_factories(config) -> Dict[str, Callable[[], Any]]:
    return {
        "sort":     partial(random_array, length=config["ARRAY_LENGTH"]),
        "search":   partial(new_grid, rows=config["GRID_ROWS"], cols=config["GRID_COLS"]),
        "knapsack": lambda: new_board(random_items(config["ITEM_COUNT"]), config["CAPACITY"]),
    }


def get_workspace() -> Workspace:
    """
    Workspace for the current session, created on first use.  The first
    call in a request takes the workspace lock; release_workspace() drops
    it when the request is torn down.
    """
    if "workspace" in g:
        return g.workspace

    hub: WorkspaceHub = current_app.extensions["visualizer"]
    workspace = hub.get(session.get("workspace"))
    if workspace is None:
        token, workspace = hub.create(_state_factories(current_app.config))
        session["workspace"] = token

    workspace.lock.acquire()
    g.workspace = workspace
    workspace.pump()
    return workspace


def release_workspace(exc: Optional[BaseException] = None) -> None:
    workspace = g.pop("workspace", None)
    if workspace is not None:
        workspace.lock.release()


def get_controller(domain_key: str) -> Optional[PlaybackController]:
    if get_domain(domain_key) is None:
        return None
    return get_workspace().controllers[domain_key]


def error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def payload() -> Dict[str, Any]:
    """JSON object body of the request; anything else reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------
def parse_state(domain: Domain, data: Any, config) -> Any:
    """Turn client JSON into a working structure.  Raises ValueError on bad input."""
    if domain.key == "sort":
        if not isinstance(data, list):
            raise ValueError("Expected a list of integers")
        return [int(v) for v in data]

    if domain.key == "search":
        if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
            raise ValueError("Expected a list of rows")
        grid = [[CellType(cell) for cell in row] for row in data]
        if len({len(row) for row in grid}) > 1:
            raise ValueError("Grid rows must all have the same length")
        return grid

    if not isinstance(data, dict):
        raise ValueError("Expected {items, capacity}")
    capacity = int(data.get("capacity", config["CAPACITY"]))
    if not 0 <= capacity <= config["MAX_CAPACITY"]:
        raise ValueError(f"Capacity must be between 0 and {config['MAX_CAPACITY']}")
    items = [
        Item(id=i, weight=int(it["weight"]), value=int(it["value"]))
        for i, it in enumerate(data.get("items", []))
    ]
    if any(it.weight < 1 for it in items):
        raise ValueError("Item weights must be positive")
    return new_board(items, capacity)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config["SECRET_KEY"] = secrets.token_hex(32)
    app.config.from_prefixed_env("VISUALIZER")
    if config:
        app.config.update(config)
    app.extensions["visualizer"] = WorkspaceHub(app.config["MAX_WORKSPACES"])
    app.teardown_request(release_workspace)

    # -----------------------------------------------------------------
    # Catalog
    # -----------------------------------------------------------------
    @app.route("/")
    def index():
        return jsonify({
            "domains": [
                {
                    "key":        d.key,
                    "label":      d.label,
                    "algorithms": [a.key for a in d.catalog],
                    "default":    d.catalog.default().key,
                }
                for d in DOMAINS.values()
            ],
            "speed_presets": SPEED_PRESETS,
        })

    @app.route("/api/algorithms/<domain_key>")
    def api_algorithms(domain_key: str):
        domain = get_domain(domain_key)
        if domain is None:
            return error(f"Unknown domain: {domain_key}", 404)
        return jsonify([a.to_dict() for a in domain.catalog])

    # -----------------------------------------------------------------
    # Playback
    # -----------------------------------------------------------------
    @app.route("/api/<domain_key>/state")
    def api_state(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/select", methods=["POST"])
    def api_select(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        key = payload().get("key")
        if not isinstance(key, str) or key not in ctl.domain.catalog:
            return error(f"Unknown algorithm: {key}")
        if not ctl.select(key):
            return error("Cannot change algorithm while running", 409)
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/start", methods=["POST"])
    def api_start(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        ctl.start()
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/step", methods=["POST"])
    def api_step(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        ctl.step()
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/reset", methods=["POST"])
    def api_reset(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        ctl.reset()
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/cancel", methods=["POST"])
    def api_cancel(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        ctl.cancel()
        return jsonify(ctl.snapshot())

    # -----------------------------------------------------------------
    # Config changes
    # -----------------------------------------------------------------
    @app.route("/api/<domain_key>/speed", methods=["POST"])
    def api_speed(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        speed = payload().get("speed", "medium")
        if isinstance(speed, str) and speed not in SPEED_PRESETS:
            return error(f"Unknown speed preset: {speed}")
        if not isinstance(speed, (str, int, float)) or isinstance(speed, bool):
            return error("Speed must be milliseconds or a preset name")
        if isinstance(speed, float) and not math.isfinite(speed):
            return error("Speed must be a finite number")
        ctl.set_speed(speed)
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/mode", methods=["POST"])
    def api_mode(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        manual = payload().get("manual", False)
        if not isinstance(manual, bool):
            return error("manual must be true or false")
        ctl.set_manual_mode(manual)
        return jsonify(ctl.snapshot())

    @app.route("/api/<domain_key>/load", methods=["POST"])
    def api_load(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        try:
            state = parse_state(ctl.domain, payload().get("state"), current_app.config)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            return error(str(e))
        if not ctl.load(state):
            return error("Cannot load while running", 409)
        return jsonify(ctl.snapshot())

    @app.route("/api/search/grid/wall", methods=["POST"])
    def api_toggle_wall():
        ctl = get_controller("search")
        data = payload()
        if ctl.is_running:
            return error("Cannot edit the grid while searching", 409)
        try:
            row, col = int(data["row"]), int(data["col"])
        except (KeyError, TypeError, ValueError, OverflowError):
            return error("Expected integer row and col")
        grid = ctl.domain.clone(ctl.state)
        if not toggle_wall(grid, row, col):
            return error(f"Cell ({row}, {col}) cannot hold a wall")
        ctl.load(grid)
        return jsonify(ctl.snapshot())

    # -----------------------------------------------------------------
    # Recording
    # -----------------------------------------------------------------
    @app.route("/api/<domain_key>/record", methods=["POST"])
    def api_record(domain_key: str):
        ctl = get_controller(domain_key)
        if ctl is None:
            return error(f"Unknown domain: {domain_key}", 404)
        key = payload().get("key") or (ctl.selected.key if ctl.selected else None)
        if not isinstance(key, str):
            return error("Expected an algorithm key")
        rec = Recorder(ctl.domain)
        try:
            rec.run(key, initial_state=ctl.state)
        except ValueError as e:
            return error(str(e))
        return jsonify(rec.export())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def _configure_logging() -> None:
    """Configure application logging for the development server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )


if __name__ == "__main__":
    _configure_logging()
    print("=" * 60)
    print("  Algorithm Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    create_app().run(debug=False)
