#!/usr/bin/env python3
"""
File Autoorganizer
Web service that matches inbox documents to destination folders and renames them
"""

import time

from flask import Flask, g, request

from autoorganizer.api import scans_bp
from autoorganizer.error_handlers import register_error_handlers
from autoorganizer.monitoring import get_logger, get_performance_tracker
from autoorganizer.settings import config

logger = get_logger('autoorganizer')


def create_app():
    app = Flask(__name__)

    register_error_handlers(app)
    app.register_blueprint(scans_bp)

    @app.before_request
    def log_request_info():
        g.request_started = time.time()
        logger.debug("HTTP Request received",
                     method=request.method,
                     path=request.path,
                     remote_addr=request.remote_addr)

    @app.after_request
    def log_response_info(response):
        duration = None
        if 'request_started' in g:
            duration = time.time() - g.request_started
            get_performance_tracker().record_operation(
                f"http {request.method} {request.url_rule or request.path}",
                duration,
                response.status_code < 500,
            )

        logger.info("HTTP Response sent",
                    status_code=response.status_code,
                    path=request.path,
                    duration=duration)
        return response

    return app


app = create_app()


if __name__ == '__main__':
    for label, path in (('source', config.source_path), ('destination', config.destination_path)):
        if not path.exists():
            logger.warning(f"Directory does not exist: {path}", role=label)

    logger.info("Starting File Autoorganizer", **config.get_summary())

    try:
        app.run(debug=config.debug_mode, host=config.host, port=config.port)
    except Exception as e:
        logger.critical("Application startup failed", exception=e)
        raise
