from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from flask import Flask, jsonify, send_from_directory


logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_STATIC_ROOT = Path(__file__).resolve().parent / "web"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_static_root(root: Optional[Union[str, os.PathLike]] = None) -> Path:
    if root is None:
        root = os.environ.get("FALLING_BLOCKS_STATIC_ROOT") or DEFAULT_STATIC_ROOT
    return Path(root).resolve()


def resolve_port(port: Optional[int] = None) -> int:
    if port is not None:
        return int(port)
    return int(os.environ.get("PORT", DEFAULT_PORT))


def create_app(static_root: Optional[Union[str, os.PathLike]] = None) -> Flask:
    root = resolve_static_root(static_root)
    app = Flask(__name__, static_folder=None)
    app.config["STATIC_ROOT"] = str(root)

    @app.get("/")
    def index():
        return send_from_directory(app.config["STATIC_ROOT"], "index.html")

    @app.get("/health")
    def health():
        return jsonify(
            status="OK",
            message="Falling Blocks server is running",
            timestamp=_utc_timestamp(),
        )

    @app.get("/<path:filename>")
    def static_file(filename: str):
        # send_from_directory rejects paths escaping the root with a 404
        return send_from_directory(app.config["STATIC_ROOT"], filename)

    return app


def serve(port: Optional[int] = None, static_root: Optional[Union[str, os.PathLike]] = None) -> None:
    app = create_app(static_root)
    port = resolve_port(port)
    logger.info("Falling Blocks server running on port %d", port)
    logger.info("Open your browser and go to: http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":  # pragma: no cover
    serve()
