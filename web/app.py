"""Flask web app serving the comparison catalog as JSON."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from flask import Flask, Response, jsonify

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from comparador import __version__  # noqa: E402
from comparador.logging_config import setup_logging  # noqa: E402
from web.api import api  # noqa: E402
from web.config import CONTENT_DIR, FLASK_DEBUG, FLASK_HOST, FLASK_PORT, LOG_TO_FILE  # noqa: E402


def create_app(content_dir: Optional[str] = None, config: Optional[Dict[str, Any]] = None) -> Flask:
    """Create the Flask app.

    Args:
        content_dir: Content directory (default: CONTENT_DIR).
        config: Extra Flask config values.
    """
    app = Flask(__name__)
    app.config["CONTENT_DIR"] = content_dir or CONTENT_DIR
    app.json.ensure_ascii = False
    app.json.sort_keys = False
    if config:
        app.config.update(config)

    app.register_blueprint(api)

    @app.route("/", methods=["GET"])
    def index() -> Response:
        return jsonify({"service": "comparador", "version": __version__})

    @app.errorhandler(404)
    def not_found(e) -> Tuple[Response, int]:
        return jsonify({"error": "not_found", "message": str(e)}), 404

    return app


setup_logging(level=logging.DEBUG if FLASK_DEBUG else logging.INFO, log_to_file=LOG_TO_FILE)
app = create_app()


if __name__ == "__main__":
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
