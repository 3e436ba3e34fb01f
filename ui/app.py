"""
Flask application factory for the citation API.
"""
from flask import Flask, jsonify

from refcite.catalog import StyleRegistry
from refcite.config import Config
from refcite.exceptions import CitationError
from refcite.formatter import CitationFormatter
from refcite.service import CitationService
from refcite.utils.logging_setup import setup_logging
from refcite.zotero import ZoteroAPI
from ui import auth  # noqa: F401 registers the token request loader
from ui.citation_routes import citations_bp
from ui.database import db
from ui.document_routes import documents_bp
from ui.extensions import limiter, login_manager
from ui.reference_routes import references_bp
from ui.user_routes import users_bp
from ui.zotero_routes import zotero_bp


def create_app(overrides=None) -> Flask:
    """Build the application; ``overrides`` are applied on top of ``Config``."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    app.config.setdefault('RATELIMIT_ENABLED', not app.config.get('TESTING', False))

    if app.config['LOG_DIR'] and not app.config.get('TESTING'):
        setup_logging(app.config['LOG_DIR'], app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    limiter.init_app(app)
    login_manager.init_app(app)

    registry = StyleRegistry(
        app.config['STYLES_DIR'],
        extension=app.config['STYLE_EXTENSION'],
        auto_reload=app.config['STYLES_AUTO_RELOAD'],
    )
    formatter = CitationFormatter(
        registry,
        locale=app.config['CITATION_LOCALE'],
        cache_size=app.config['FORMAT_CACHE_SIZE'],
    )
    app.extensions['citation_service'] = CitationService(registry, formatter)
    app.extensions['zotero_api'] = ZoteroAPI(
        app.config['ZOTERO_API_URL'], timeout=app.config['ZOTERO_TIMEOUT']
    )

    app.register_blueprint(citations_bp)
    app.register_blueprint(references_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(documents_bp)
    app.register_blueprint(zotero_bp)

    register_error_handlers(app)

    @app.route('/health', methods=['GET'])
    def health():
        return "ok", 200

    with app.app_context():
        db.create_all()

    app.logger.info(f"Citation API ready (styles: {app.config['STYLES_DIR']})")
    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(CitationError)
    def citation_error(e):
        if e.status_code >= 500:
            app.logger.error(f"{type(e).__name__}: {e.message}")
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(401)
    def unauthorized_error(e):
        return jsonify({"error": "Authentication required"}), 401

    @app.errorhandler(404)
    def not_found_error(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({"error": "Rate limit exceeded. Please try again later."}), 429

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.error(f"Internal Server Error: {e}")
        return jsonify({"error": "Internal server error"}), 500
