from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Mapping

from flask import Flask, request

from .config import Config, engine_options_for
from .extensions import db, migrate
from .errors import register_error_handlers
from .services import (
    EXTENSION_KEY,
    CatalogService,
    CredentialService,
    OrderService,
    Services,
    StatsService,
)


def build_services(config: Mapping[str, Any]) -> Services:
    """Construct the service objects from application config."""
    return Services(
        credentials=CredentialService(
            secret_key=config["SECRET_KEY"],
            token_ttl=timedelta(days=config["TOKEN_TTL_DAYS"]),
            bcrypt_rounds=config["BCRYPT_ROUNDS"],
        ),
        catalog=CatalogService(low_stock_threshold=config["LOW_STOCK_THRESHOLD"]),
        orders=OrderService(),
        stats=StatsService(low_stock_threshold=config["LOW_STOCK_THRESHOLD"]),
    )


def create_app(config_overrides: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS",
        engine_options_for(app.config["SQLALCHEMY_DATABASE_URI"], app.config["DB_POOL_SIZE"]),
    )

    app.logger.setLevel(app.config["LOG_LEVEL"])
    logging.getLogger("bakery").setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    app.extensions[EXTENSION_KEY] = build_services(app.config)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.products import products_bp
    from .routes.orders import orders_bp
    from .routes.admin import admin_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(admin_bp)

    register_error_handlers(app)

    allowed_origins = set(app.config["CORS_ORIGINS"])

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
