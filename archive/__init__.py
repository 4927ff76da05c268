# archive/__init__.py
import os

from flask import Flask, jsonify
from flask_migrate import Migrate

# Alias keeps the SQLAlchemy instance distinct from any module named "db"
from .models.base import db as SA_DB
from .config import DEFAULT_PASSWORD_HASH_METHOD

migrate = Migrate()


def _env_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def create_app(config=None):
    """Build the archive API. ``config`` overrides values read from the environment."""
    app = Flask(__name__)

    BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    DB_PATH = os.path.join(BASE_DIR, "archive.db")

    app.config.update(
        SECRET_KEY=os.environ.get("SECRET_KEY", "dev"),
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL", f"sqlite:///{DB_PATH}"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        AUTO_CREATE_TABLES=os.environ.get("AUTO_CREATE_TABLES", "1"),
        PASSWORD_HASH_METHOD=os.environ.get("PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD),
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO"),
    )
    if config:
        app.config.update(config)

    SA_DB.init_app(app)
    migrate.init_app(app, SA_DB)

    level = app.config["LOG_LEVEL"]
    # app.logger is the "archive" logger; service module loggers inherit its level
    app.logger.setLevel(level.upper() if isinstance(level, str) else level)
    app.logger.info("DB URI: %s", app.config["SQLALCHEMY_DATABASE_URI"])
    app.logger.info("AUTO_CREATE_TABLES=%s", app.config["AUTO_CREATE_TABLES"])

    with app.app_context():
        # Ensure all models are imported so metadata is complete
        from . import models as _models  # noqa: F401

        if _env_flag(app.config["AUTO_CREATE_TABLES"]):
            SA_DB.create_all()

    from .api import register_blueprints, register_error_handlers

    register_blueprints(app)
    register_error_handlers(app)

    @app.get("/")
    def health():
        return jsonify(success=True, message="Character archive API is running")

    return app
