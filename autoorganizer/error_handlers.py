"""
Global Error Handlers
Turns engine and HTTP errors into JSON responses
"""

from datetime import datetime

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .errors import DocumentSorterError
from .monitoring import get_logger

logger = get_logger('error_handlers')


def register_error_handlers(app):
    """Register global error handlers with Flask app"""

    @app.errorhandler(404)
    def not_found(error):
        logger.warning("404 Not Found",
                       path=request.path,
                       method=request.method,
                       remote_addr=request.remote_addr)

        return jsonify({
            'error': 'Not Found',
            'message': 'The requested resource was not found',
            'status_code': 404,
            'timestamp': datetime.now().isoformat()
        }), 404

    @app.errorhandler(DocumentSorterError)
    def handle_engine_error(error):
        """Invalid scan inputs and similar caller mistakes"""
        logger.warning("Request rejected",
                       path=request.path,
                       method=request.method,
                       error_type=type(error).__name__,
                       error_path=error.path,
                       description=str(error))

        return jsonify({
            'error': 'Bad Request',
            'message': str(error),
            'path': error.path,
            'status_code': 400,
            'timestamp': datetime.now().isoformat()
        }), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        logger.warning("HTTP Exception",
                       status_code=error.code,
                       path=request.path,
                       method=request.method,
                       description=error.description)

        return jsonify({
            'error': error.name,
            'message': error.description,
            'status_code': error.code,
            'timestamp': datetime.now().isoformat()
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.critical("Unexpected error",
                        path=request.path,
                        method=request.method,
                        error_type=type(error).__name__,
                        exception=error)

        return jsonify({
            'error': 'Unexpected Error',
            'message': 'An unexpected error occurred',
            'status_code': 500,
            'timestamp': datetime.now().isoformat()
        }), 500
