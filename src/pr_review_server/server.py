"""
HTTP Server

Flask application exposing the review endpoint and the stored reports.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import __version__
from .api import PRReviewAPI
from .config import AppConfig
from .errors import InternalError, ReviewError


logger = logging.getLogger(__name__)


def create_app(config: AppConfig, reviewer_api: Optional[PRReviewAPI] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Validated application configuration
        reviewer_api: Optional pre-built orchestrator (used by tests)

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for frontend

    api = reviewer_api or PRReviewAPI(config)
    app.extensions['pr_review_api'] = api

    @app.errorhandler(ReviewError)
    def handle_review_error(error: ReviewError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        logger.exception("Error processing PR or saving file")
        wrapped = InternalError(f"Internal server error: {error}")
        return jsonify(wrapped.to_dict()), wrapped.status_code

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'pr-review-server',
            'version': __version__
        })

    @app.route('/review-pull-request', methods=['POST'])
    def review_pull_request():
        """Generate a review for the PR given in ``prLink``."""
        body = request.get_json(silent=True)
        result = api.review_pull_request(body)
        return jsonify(result.model_dump())

    @app.route('/reviews/<path:filename>', methods=['GET'])
    def get_review_file(filename: str):
        """Serve a stored HTML/Markdown report."""
        try:
            path = api.report_store.resolve(filename)
        except FileNotFoundError:
            return jsonify({'error': f'Review file not found: {filename}'}), 404
        return send_file(path.resolve())

    return app
