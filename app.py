# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from mongoengine.errors import ValidationError as DocumentValidationError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
import logging
import os
import sys
import time

from config import Config
from database import init_db, ping
from routes.auth import auth_bp
from routes.bookmarks_routes import bookmarks_bp
from routes.data import data_bp
from routes.highlight import highlight_bp
from routes.notes import notes_bp
from routes.progress import progress_bp
from routes.topics import topics_bp
from utils.errors import ApiError, ValidationError

logger = logging.getLogger(__name__)


def configure_logging(level):
    # Configure logging to output to stdout
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error(f"{request.method} {request.path} failed: {error.message}")
        return jsonify(error.to_json()), error.status_code

    @app.errorhandler(DocumentValidationError)
    def handle_document_validation_error(error):
        api_error = ValidationError.from_mongoengine(error)
        logger.warning(f"{request.method} {request.path} rejected by document validation: {api_error.message}")
        return jsonify(api_error.to_json()), api_error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.error(f"Unhandled error on {request.method} {request.path}: {str(error)}", exc_info=True)
        return jsonify({'error': 'An internal server error occurred'}), 500


def create_app(config_class=Config):
    configure_logging(config_class.LOG_LEVEL)

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True

    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    init_db(config_class)

    app.register_blueprint(auth_bp)
    app.register_blueprint(bookmarks_bp)
    app.register_blueprint(highlight_bp)
    app.register_blueprint(notes_bp)
    app.register_blueprint(topics_bp)
    app.register_blueprint(progress_bp)
    app.register_blueprint(data_bp)

    register_error_handlers(app)

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        start_time = g.get('start_time')
        if start_time is not None:
            duration = time.time() - start_time
            logger.info(f"{request.method} {request.path} -> {response.status_code} in {duration:.3f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint that also verifies the MongoDB connection"""
        try:
            database = ping()
            return jsonify({
                'status': 'healthy',
                'database': database,
                'timestamp': time.time()
            })
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({
                'status': 'unhealthy',
                'error': str(e),
                'timestamp': time.time()
            }), 500

    return app


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5001))
    create_app().run(debug=True, port=port)
