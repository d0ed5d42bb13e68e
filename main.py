"""
main.py — Dijkstra Trace Server
===============================
A small Flask JSON API in front of the trace generator.  It is one
consumer of traces: a browser front-end edits the graph through it,
asks for a run, then steps back and forth through the Steps.

Routes:
  GET    /api/state                        – graph, start, cursor
  GET    /api/graph                        – current graph
  PUT    /api/graph                        – replace graph (validated)
  POST   /api/graph/sample                 – restore the sample graph
  POST   /api/graph/vertices               – add a vertex
  PATCH  /api/graph/vertices/<id>          – move a vertex
  DELETE /api/graph/vertices/<id>          – delete a vertex + its edges
  POST   /api/graph/edges                  – add an edge (validated)
  PATCH  /api/graph/edges/<from>/<to>      – change an edge weight
  DELETE /api/graph/edges/<from>/<to>      – delete an edge
  POST   /api/config/start                 – choose the start vertex
  POST   /api/run                          – run Dijkstra, cursor → step 0
  POST   /api/step/next                    – advance one step
  POST   /api/step/prev                    – rewind one step
  POST   /api/step/goto                    – jump to step N
  POST   /api/step/reset                   – back to step 0
  GET    /api/trace                        – the whole run, every step

State management:
  The Flask session holds only the graph, the start vertex and the
  cursor.  Traces are regenerated from those on demand: the run is
  pure, so the same graph and start always give the same Steps.
  Any edit to the graph or start clears the cursor; the client must
  run again.
"""

import logging
import os
from dataclasses import asdict
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, Flask, current_app, jsonify, request, session

from config import AppConfig
from graph import Graph, GraphValidationError
from algorithms import InvalidStartVertexError, Trace, generate_trace
from engine import Recorder, Stepper

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or start from the sample."""
    if "graph" not in session:
        session["graph"] = Graph.sample().to_dict()
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph) -> None:
    session["graph"] = graph.to_dict()
    clear_run()


def get_start(graph: Graph) -> Optional[int]:
    start = session.get("start", current_app.config["DEFAULT_START"])
    if graph.has_vertex(start):
        return start
    # fall back to the first vertex so a fresh graph is always runnable
    return graph.vertices[0].id if graph.vertices else None


def clear_run() -> None:
    session["current_step"] = None


def get_state() -> Dict[str, Any]:
    graph = get_graph()
    return {
        "start":        get_start(graph),
        "current_step": session.get("current_step"),
        "vertex_ids":   graph.vertex_ids(),
        "graph_valid":  graph.is_valid(),
    }


def error(message: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"error": message}), status


def body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def is_int(value: Any) -> bool:
    # JSON true/false arrive as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def position(data: Dict[str, Any]) -> Tuple[float, float]:
    return float(data.get("x", 0.0)), float(data.get("y", 0.0))


def load_stepper() -> Optional[Stepper]:
    """Rebuild the trace for the session's graph and park a Stepper on the cursor."""
    idx = session.get("current_step")
    if idx is None:
        return None
    graph = get_graph()
    stepper = Stepper()
    stepper.load(generate_trace(graph, get_start(graph)), index=idx)
    return stepper


def step_payload(stepper: Stepper) -> Dict[str, Any]:
    session["current_step"] = stepper.current_idx
    step = stepper.current_step
    return {
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps,
        "at_start":     stepper.at_start,
        "at_end":       stepper.at_end,
        "step":         step.to_dict() if step else None,
        "fringe":       [list(entry) for entry in step.sorted_fringe()] if step else [],
        "tree_edges":   [list(e.key) for e in step.tree_edges()] if step else [],
    }


# ---------------------------------------------------------------------------
# API: State & Graph
# ---------------------------------------------------------------------------
@api.route("/state", methods=["GET"])
def api_state():
    return jsonify(get_state())


@api.route("/graph", methods=["GET"])
def api_graph_get():
    graph = get_graph()
    return jsonify({"graph": graph.to_dict(), "start": get_start(graph)})


@api.route("/graph", methods=["PUT"])
def api_graph_put():
    data = body()
    raw = data.get("graph", {})
    if not isinstance(raw, dict):
        return error("graph must be an object with vertices and edges")
    try:
        graph = Graph.from_dict(raw)
        graph.validate()
    except (GraphValidationError, AttributeError, KeyError, TypeError, ValueError) as e:
        return error(str(e))

    start = data.get("start")
    if start is not None and not (is_int(start) and graph.has_vertex(start)):
        return error(f"Start vertex {start} is not in the graph")

    save_graph(graph)
    if start is not None:
        session["start"] = start
    logger.info("graph replaced: %d vertices, %d edges", graph.vertex_count(), graph.edge_count())
    return jsonify({"graph": graph.to_dict(), "start": get_start(graph)})


@api.route("/graph/sample", methods=["POST"])
def api_graph_sample():
    graph = Graph.sample()
    save_graph(graph)
    session["start"] = 0
    return jsonify({"graph": graph.to_dict(), "start": 0})


@api.route("/graph/vertices", methods=["POST"])
def api_vertex_add():
    try:
        x, y = position(body())
    except (TypeError, ValueError) as e:
        return error(str(e))
    graph = get_graph()
    vertex = graph.add_vertex(x, y)
    save_graph(graph)
    return jsonify({"vertex": vertex.to_dict()}), 201


@api.route("/graph/vertices/<int:vertex_id>", methods=["PATCH"])
def api_vertex_move(vertex_id: int):
    graph = get_graph()
    if not graph.has_vertex(vertex_id):
        return error(f"No vertex {vertex_id}", 404)
    try:
        x, y = position(body())
    except (TypeError, ValueError) as e:
        return error(str(e))
    vertex = graph.move_vertex(vertex_id, x, y)
    # positions are presentation-only; a move keeps the current run
    session["graph"] = graph.to_dict()
    return jsonify({"vertex": vertex.to_dict()})


@api.route("/graph/vertices/<int:vertex_id>", methods=["DELETE"])
def api_vertex_delete(vertex_id: int):
    graph = get_graph()
    if vertex_id == get_start(graph):
        return error("Cannot delete the starting node. Please change the starting node first.")
    if not graph.remove_vertex(vertex_id):
        return error(f"No vertex {vertex_id}", 404)
    save_graph(graph)
    return jsonify({"graph": graph.to_dict()})


@api.route("/graph/edges", methods=["POST"])
def api_edge_add():
    data = body()
    graph = get_graph()
    try:
        graph.add_edge(int(data["source"]), int(data["target"]), int(data.get("weight", 1)))
        graph.validate()
    except (KeyError, TypeError, ValueError) as e:
        return error(str(e))
    save_graph(graph)
    return jsonify({"graph": graph.to_dict()}), 201


@api.route("/graph/edges/<int:source>/<int:target>", methods=["PATCH"])
def api_edge_weight(source: int, target: int):
    data = body()
    graph = get_graph()
    if "weight" not in data:
        return error("weight is required")
    if not graph.has_edge(source, target):
        return error(f"No edge {source} to {target}", 404)
    try:
        edge = graph.set_weight(source, target, int(data["weight"]))
    except (TypeError, ValueError) as e:
        return error(str(e))
    save_graph(graph)
    return jsonify({"edge": edge.to_dict()})


@api.route("/graph/edges/<int:source>/<int:target>", methods=["DELETE"])
def api_edge_delete(source: int, target: int):
    graph = get_graph()
    if not graph.remove_edge(source, target):
        return error(f"No edge {source} to {target}", 404)
    save_graph(graph)
    return jsonify({"graph": graph.to_dict()})


@api.route("/config/start", methods=["POST"])
def api_config_start():
    start = body().get("start")
    graph = get_graph()
    if not is_int(start) or not graph.has_vertex(start):
        return error(f"Start vertex {start!r} is not in the graph")
    session["start"] = start
    clear_run()
    return jsonify({"start": start})


# ---------------------------------------------------------------------------
# API: Run & Step Navigation
# ---------------------------------------------------------------------------
@api.route("/run", methods=["POST"])
def api_run():
    graph = get_graph()
    try:
        graph.validate()
    except GraphValidationError as e:
        return error(str(e))

    rec = Recorder()
    try:
        metrics = rec.run(graph, get_start(graph))
    except InvalidStartVertexError as e:
        return error(str(e))

    stepper = Stepper(rec.trace)
    payload = step_payload(stepper)
    payload["metrics"] = asdict(metrics)
    return jsonify(payload)


@api.route("/step/next", methods=["POST"])
def api_step_next():
    stepper = load_stepper()
    if stepper is None:
        return error("Run the algorithm first")
    if not stepper.next_step():
        return error("Already at last step")
    return jsonify(step_payload(stepper))


@api.route("/step/prev", methods=["POST"])
def api_step_prev():
    stepper = load_stepper()
    if stepper is None:
        return error("Run the algorithm first")
    if not stepper.prev_step():
        return error("Already at first step")
    return jsonify(step_payload(stepper))


@api.route("/step/goto", methods=["POST"])
def api_step_goto():
    stepper = load_stepper()
    if stepper is None:
        return error("Run the algorithm first")
    idx = body().get("index", 0)
    if not is_int(idx) or not stepper.goto_step(idx):
        return error("Invalid step index")
    return jsonify(step_payload(stepper))


@api.route("/step/reset", methods=["POST"])
def api_step_reset():
    stepper = load_stepper()
    if stepper is None:
        return error("Run the algorithm first")
    stepper.rewind()
    return jsonify(step_payload(stepper))


@api.route("/trace", methods=["GET"])
def api_trace():
    graph = get_graph()
    try:
        trace: Trace = generate_trace(graph, get_start(graph))
    except InvalidStartVertexError as e:
        return error(str(e))
    return jsonify(trace.to_dict())


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[AppConfig] = None) -> Flask:
    cfg = config or AppConfig.from_env()
    cfg.validate()

    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config.update(cfg.flask_settings())
    app.register_blueprint(api)
    logger.debug("app created: default start %s", cfg.default_start)
    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    config_path = os.environ.get("TRACE_CONFIG")
    cfg = AppConfig.from_yaml(config_path) if config_path else AppConfig.from_env()
    app = create_app(cfg)
    logger.info("Dijkstra trace server on http://%s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port, debug=cfg.debug)
