# microin/blueprints/errors/routes.py
from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ...exceptions import NotFoundError, ValidationFailure
from . import errors_bp


# 404 – task or user id did not resolve
@errors_bp.app_errorhandler(NotFoundError)
def err_not_found(e):
    return jsonify({"error": str(e)}), 404


# 400 – malformed request body
@errors_bp.app_errorhandler(ValidationFailure)
def err_validation(e):
    current_app.logger.info(f"Rejected {request.method} {request.path}: {e}")
    return jsonify({"error": str(e)}), 400


# Werkzeug errors (unknown route, 405, 415 ...) keep their code
@errors_bp.app_errorhandler(HTTPException)
def err_http(e: HTTPException):
    return jsonify({"error": e.description}), e.code


# Last-resort: any other Exception
@errors_bp.app_errorhandler(Exception)
def err_unexpected(e):
    current_app.logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
    # Don't leak internals, just a generic 500
    return jsonify({"error": "Internal server error"}), 500
