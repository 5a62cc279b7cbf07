from flask import Flask, jsonify, redirect, request, url_for
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .exceptions import ScribeboardError
from .extensions import db, login_manager, migrate, rq
from .logging_config import configure_logging


def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    rq.init_app(app)

    # the registry and its HTTP session live as long as the app
    from .providers import ProviderRegistry
    from .services.credentials import CredentialStore
    app.extensions["provider_registry"] = ProviderRegistry.from_config(app.config, CredentialStore(db.session))

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        if request.path.startswith("/api/"):
            return jsonify({"error": "Unauthorized"}), 401
        return redirect(url_for("auth.login", next=request.path))

    from .blueprints.auth import bp as auth_bp
    from .blueprints.dashboard import bp as dashboard_bp
    from .api.health import bp as health_api_bp
    from .api.settings import bp as settings_api_bp
    from .api.transcriptions import bp as transcriptions_api_bp
    from .api.upload import bp as upload_api_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(dashboard_bp, url_prefix="/app")
    app.register_blueprint(health_api_bp)
    app.register_blueprint(settings_api_bp)
    app.register_blueprint(transcriptions_api_bp)
    app.register_blueprint(upload_api_bp)

    register_error_handlers(app)

    @app.get("/")
    def index():
        return redirect(url_for("dashboard.index"))

    return app


def register_error_handlers(app):
    @app.errorhandler(ScribeboardError)
    def handle_domain_error(exc):
        if exc.status_code >= 500:
            app.logger.error('%s: %s', exc.code, exc, exc_info=exc)
        else:
            app.logger.warning('%s: %s', exc.code, exc)
        return jsonify({"error": str(exc), "code": exc.code}), exc.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        return jsonify({"error": exc.errors(include_url=False, include_context=False, include_input=False)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
