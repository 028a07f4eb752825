from __future__ import annotations

import os
from typing import Any, Dict

import click
from flask import Flask, current_app, g, jsonify, request

from quill.config import Config
from quill.errors import BlogError
from quill.extensions import (
    db,
    migrate,
    login_manager,
    limiter,
    cache,
)
from quill.logging_config import configure_logging
from quill.constants import UserRole
from quill.models.user import User  # ensure models imported for migrations
from quill.repositories.user import create_user, get_user_by_id, get_user_by_username
from quill.utils.crypto import hash_password


def create_app(config_overrides: Dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=False)

    # Load config
    app.config.from_object(Config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"), app.config.get("LOG_FORMAT", "json"))

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id: str) -> User | None:
        try:
            return get_user_by_id(int(user_id))
        except ValueError:
            return None

    # Request context enrichment for logging
    @app.before_request
    def add_request_context() -> None:
        g.request_id = request.headers.get("X-Request-ID") or os.urandom(8).hex()

    @app.after_request
    def echo_request_id(resp):
        resp.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return resp

    # Blueprints
    from quill.blueprints.api.auth import bp as auth_bp
    from quill.blueprints.api.categories import bp as categories_bp
    from quill.blueprints.api.posts import bp as posts_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(posts_bp)

    # Health route
    @app.get("/health")
    def health():
        try:
            db.session.execute(db.text("SELECT 1"))
            db_ok = "connected"
        except Exception:
            db_ok = "error"
        return jsonify({"status": "ok", "db": db_ok}), 200

    # Error handlers (JSON envelope)
    @app.errorhandler(BlogError)
    def blog_error(e: BlogError):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"success": False, "message": "Bad request"}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"success": False, "message": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "message": "Method not allowed"}), 405

    @app.errorhandler(413)
    def too_large(e):
        return jsonify({"success": False, "message": "Request too large"}), 413

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({"success": False, "message": "Too many requests"}), 429

    @app.errorhandler(500)
    def server_error(e):
        current_app.logger.error(f"Unhandled error on {request.method} {request.path}: {getattr(e, 'original_exception', e)!r}")
        return jsonify({"success": False, "message": "Server error"}), 500

    # CLI: create admin user
    @app.cli.command("create-admin")
    @click.option("--username", prompt=True)
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(username: str, email: str, password: str) -> None:
        with app.app_context():
            if get_user_by_username(username):
                click.echo("User already exists")
                return
            create_user(
                username=username,
                email=email,
                password_hash=hash_password(password),
                role=UserRole.ADMIN,
            )
            click.echo("Admin user created")

    return app
