import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import json_log_formatter
import sentry_sdk
from flask import Flask
from sentry_sdk.integrations.flask import FlaskIntegration

from .config import Config
from .exceptions import FatalConfiguration
from .extensions import cors
from .services.recommendation_service import GeminiRecommender
from .services.seed_data import seed_demo_data
from .services.task_store import TaskStore

# Blueprints
from .blueprints.errors import errors_bp
from .blueprints.api import api_bp
from .blueprints.main import main_bp


# Optional: Sentry
def _init_sentry(app):
    dsn = app.config.get("SENTRY_DSN")
    if not dsn:
        return
    try:
        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=app.config.get("SENTRY_TRACES_SAMPLE_RATE", 0.0),
            release=app.config.get("APP_VERSION"),
            send_default_pii=False,
        )
        app.logger.info("Sentry initialized.")
    except Exception as e:
        app.logger.warning(f"Sentry init failed: {e}")

def _init_logging(app):
    # Base level
    level_name = app.config.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    app.logger.setLevel(level)

    # app.logger is shared per import name; drop handlers from a previous create_app()
    for h in list(app.logger.handlers):
        app.logger.removeHandler(h)
        h.close()

    # Ensure log dir exists
    log_dir = Path(app.config.get("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / app.config.get("LOG_FILENAME", "microin.log")

    # Formatter: text or JSON
    if app.config.get("LOG_JSON", False):
        formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")

    # Rotating file handler (5MB x 5)
    file_handler = RotatingFileHandler(
        log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    app.logger.addHandler(file_handler)

    # Stream to stdout as well (useful on dev/docker)
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    app.logger.addHandler(stream_handler)

    app.logger.info("Logging initialized.")

def _init_marketplace(app, store, recommender):
    if store is None:
        store = TaskStore(nft_image_url=app.config["NFT_IMAGE_URL_TEMPLATE"])
        if app.config.get("SEED_DEMO_DATA"):
            seed_demo_data(store)

    if recommender is None:
        if not app.config.get("GEMINI_API_KEY"):
            app.logger.critical("GEMINI_API_KEY (or API_KEY) is not set; refusing to start.")
            raise FatalConfiguration(
                "GEMINI_API_KEY not found. Set it in the environment or a .env file."
            )
        recommender = GeminiRecommender.from_config(app.config)

    app.extensions["microin.task_store"] = store
    app.extensions["microin.recommender"] = recommender

def create_app(config_object=None, *, store=None, recommender=None):
    """Build the MICROIN API.

    store / recommender can be injected (tests do); otherwise one TaskStore is
    built for the life of the process and a Gemini recommender is configured,
    which requires GEMINI_API_KEY.
    """
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.json.sort_keys = False

    # Logging must come before anything that can fail so startup errors are captured
    _init_logging(app)
    _init_sentry(app)

    cors.init_app(app, resources={
        r"/*": {
            "origins": app.config.get("CORS_ORIGINS", ["*"]),
            "methods": ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    _init_marketplace(app, store, recommender)

    # Blueprints
    app.register_blueprint(errors_bp)  # error handlers
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix=app.config.get("API_PREFIX", "/api"))

    return app
