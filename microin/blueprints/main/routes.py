# microin/blueprints/main/routes.py
import json
from datetime import datetime, timezone

from flask import current_app, jsonify, request

from . import main_bp


# ---- Tiny JSON health route (store counts + version) ----
@main_bp.route("/status")
def status():
    store = current_app.extensions["microin.task_store"]
    payload = {
        "service": "microin",
        "version": current_app.config.get("APP_VERSION"),
        "time_utc": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "checks": {"store": "ok"},
        "counts": store.counts(),
    }

    # ?pretty=1 -> pretty JSON
    if request.args.get("pretty"):
        return current_app.response_class(
            json.dumps(payload, indent=2) + "\n",
            mimetype="application/json"
        ), 200

    return jsonify(payload), 200
