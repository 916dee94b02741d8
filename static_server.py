#!/usr/bin/env python3
# static_server.py
import os, sys, json, copy, signal, logging
from typing import Dict, Any, Optional
from flask import Flask, request, jsonify, redirect, abort, send_from_directory
from flask_cors import CORS
from jsonschema import validate, ValidationError
from werkzeug.security import safe_join
from werkzeug.serving import make_server
from schemas import CONFIG_SCHEMA, DEFAULTS, HEALTH_PAYLOAD

# =========================
# Config
# =========================
def load_cfg(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the JSON config (missing file = defaults), apply env overrides and validate.

    Raises jsonschema.ValidationError or ValueError on bad input.
    """
    path = path or os.environ.get("SERVER_CONFIG", "config.json")
    raw: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    validate(raw, CONFIG_SCHEMA)

    cfg = copy.deepcopy(DEFAULTS)
    for section, values in raw.items():
        cfg[section].update(values)

    if os.environ.get("PORT"):
        cfg["server"]["port"] = int(os.environ["PORT"])
    if os.environ.get("HOST"):
        cfg["server"]["host"] = os.environ["HOST"]
    if os.environ.get("STATIC_DIR"):
        cfg["static"]["directory"] = os.environ["STATIC_DIR"]
    validate(cfg, CONFIG_SCHEMA)

    cfg["static"]["directory"] = os.path.abspath(cfg["static"]["directory"])
    return cfg

# =========================
# Static lookup
# =========================
def _within(root: str, target: str) -> bool:
    real_root = os.path.realpath(root)
    return os.path.commonpath([real_root, os.path.realpath(target)]) == real_root

def _send_asset(static_cfg: Dict[str, Any], rel: str, trailing_slash: bool = False):
    root = static_cfg["directory"]
    target = safe_join(root, rel)
    if target is None or not _within(root, target):
        logging.warning("Rejected path outside asset directory: %s", request.path)
        abort(404)
    if static_cfg["dotfiles"] == "ignore" and any(p.startswith(".") for p in rel.split("/")):
        abort(404)
    if os.path.isdir(target):
        if not static_cfg["directory_index"]:
            abort(404)
        # express-style: /dir -> /dir/, /dir/ -> /dir/index.html
        if not trailing_slash:
            location = request.path + "/"
            if request.query_string:
                location += "?" + request.query_string.decode("latin-1")
            return redirect(location, code=301)
        rel = f"{rel}/{static_cfg['index']}"
        target = os.path.join(target, static_cfg["index"])
    elif trailing_slash:
        abort(404)
    if not os.path.isfile(target) or not os.access(target, os.R_OK):
        abort(404)
    return send_from_directory(root, rel, max_age=static_cfg["max_age"])

# =========================
# Flask HTTP (health + entry file + static assets)
# =========================
def create_app(cfg: Dict[str, Any]) -> Flask:
    static_cfg = cfg["static"]
    # Flask's own /static route is disabled, every asset goes through _send_asset
    app = Flask(__name__, static_folder=None)
    app.debug = bool(cfg["server"]["debug"])
    CORS(app, resources={r"*": {"origins": cfg["server"]["cors_allow_origins"]}})

    @app.before_request
    def options_only_for_preflight():
        # OPTIONS is answered for CORS preflights only, flask-cors adds the headers
        if request.method == "OPTIONS" and not (
            request.headers.get("Origin") and request.headers.get("Access-Control-Request-Method")
        ):
            abort(404)

    @app.get("/health")
    def health():
        return jsonify(HEALTH_PAYLOAD), 200

    @app.get("/")
    def root():
        return _send_asset(static_cfg, static_cfg["index"])

    @app.get("/<path:asset>")
    def assets(asset):
        return _send_asset(static_cfg, asset.strip("/"), request.path.endswith("/"))

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(_e):
        return jsonify({"error": "not_found", "path": request.path}), 404

    return app

# =========================
# Process lifecycle
# =========================
def _graceful(_sig, _frm):
    # serve_forever() treats KeyboardInterrupt as a clean stop
    raise KeyboardInterrupt

def serve(cfg: Dict[str, Any]) -> None:
    host, port = cfg["server"]["host"], int(cfg["server"]["port"])
    root = cfg["static"]["directory"]
    if not os.path.isdir(root):
        logging.error("Asset directory not found: %s", root)
        sys.exit(1)

    app = create_app(cfg)
    try:
        srv = make_server(host, port, app, threaded=True)
    except (OSError, SystemExit) as e:
        # werkzeug prints and exits by itself on EADDRINUSE
        logging.error("Could not bind %s:%s (%s)", host, port, e)
        sys.exit(1)

    signal.signal(signal.SIGTERM, _graceful)
    logging.info("Server running at http://localhost:%s", srv.port)
    logging.info("Serving %s", root)
    srv.serve_forever()
    logging.info("Server stopped")

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    try:
        cfg = load_cfg()
    except (ValidationError, ValueError, OSError) as e:
        logging.error("Invalid configuration: %s", e)
        sys.exit(1)
    serve(cfg)

if __name__ == "__main__":
    main()
