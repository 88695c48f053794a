"""Flask app exposing the prompt and pricing API."""

from flask import Flask

from quoteprompts.api import api
from quoteprompts.config import FLASK_DEBUG, FLASK_HOST, FLASK_PORT
from quoteprompts.logging_config import setup_logging

__all__ = ["create_app", "main"]


def create_app() -> Flask:
    """Build the Flask app with the API blueprint registered."""
    app = Flask(__name__)
    app.register_blueprint(api)
    return app


def main() -> None:
    setup_logging()
    create_app().run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)


if __name__ == "__main__":
    main()
