"""
Flask JSON API around the load scheduler.
"""

from typing import Any, Dict, List

from flask import Flask, jsonify, request
from flask_cors import CORS

from vrp.config import SchedulerConfig
from vrp.data import Load, generate_loads, make_load
from vrp.parser import parse_loads
from vrp.solver import UnroutableLoadError, build_plan


def _loads_from_json(items: List[Dict[str, Any]]) -> List[Load]:
    if not isinstance(items, list):
        raise ValueError("loads must be a list")
    loads = []
    for idx, item in enumerate(items):
        try:
            pickup = item["pickup"]
            dropoff = item["dropoff"]
            loads.append(
                make_load(
                    int(item.get("load_number", idx + 1)),
                    (float(pickup[0]), float(pickup[1])),
                    (float(dropoff[0]), float(dropoff[1])),
                )
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ValueError(f"loads[{idx}] is malformed: {e}") from e
    return loads


def _error(message: str, status: int = 400):
    return jsonify({"status": "error", "message": message}), status


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)

    @app.route("/api/schedule", methods=["POST"])
    def api_schedule():
        body = request.get_json(force=True, silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            return _error("request body must be a JSON object")
        try:
            config = SchedulerConfig.from_dict(
                {
                    "origin": body.get("origin"),
                    "max_drive_time": body.get("max_drive_time"),
                    "policy": body.get("policy"),
                    "on_unroutable": body.get("on_unroutable"),
                }
            )
            # Accept loads or raw file text from the client; otherwise generate an instance.
            if body.get("loads") is not None:
                loads = _loads_from_json(body["loads"])
            elif body.get("text") is not None:
                loads = parse_loads(str(body["text"]))
            else:
                loads = generate_loads(seed=int(body.get("seed", 999)), n=int(body.get("load_count", 20)))
            plan = build_plan(config, loads)
        except UnroutableLoadError as e:
            return jsonify({"status": "error", "message": str(e), "unroutable": e.load_numbers}), 400
        except ValueError as e:
            return _error(str(e))

        plan["loads_by_number"] = {str(ld.load_number): ld.to_dict() for ld in loads}
        return jsonify(plan)

    @app.route("/api/loads", methods=["GET"])
    def api_loads():
        try:
            count = int(request.args.get("count", 20))
            seed = int(request.args.get("seed", 999))
            loads = generate_loads(seed=seed, n=count)
        except ValueError as e:
            return _error(str(e))
        return jsonify({"loads": [ld.to_dict() for ld in loads]})

    return app
