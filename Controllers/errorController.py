from flask import Blueprint, current_app, jsonify, request
from mongoengine.errors import ValidationError, DoesNotExist, NotUniqueError
from werkzeug.exceptions import HTTPException

from Utils.appError import AppError

error_bp = Blueprint('errors', __name__)


def _error_response(message, status_code):
    return jsonify({"success": False, "message": message}), status_code


@error_bp.app_errorhandler(AppError)
def handle_app_error(err):
    log = current_app.logger.error if err.status_code >= 500 else current_app.logger.warning
    log(f"AppError {err.status_code} at {request.method} {request.path}: {err}")
    return _error_response(err.message, err.status_code)


@error_bp.app_errorhandler(ValidationError)
def handle_validation_error(err):
    current_app.logger.warning(f"Validation error at {request.path}: {err}")
    return _error_response(str(err), 400)


@error_bp.app_errorhandler(NotUniqueError)
def handle_duplicate_error(err):
    current_app.logger.warning(f"Duplicate key at {request.path}: {err}")
    return _error_response("Duplicate value entered", 400)


@error_bp.app_errorhandler(DoesNotExist)
def handle_not_found(err):
    return _error_response(str(err) or "Resource not found", 404)


@error_bp.app_errorhandler(HTTPException)
def handle_http_exception(err):
    if err.code == 429:
        return _error_response("Rate limit exceeded. Please slow down.", 429)
    if err.code == 404:
        current_app.logger.warning(
            f"404 Not Found: {request.url} | Method: {request.method} | IP: {request.remote_addr}"
        )
    return _error_response(err.description or err.name, err.code)


@error_bp.app_errorhandler(Exception)
def handle_unexpected_error(err):
    # This includes traceback automatically
    current_app.logger.exception(
        f"Unexpected Application Error: {err} | URL: {request.url} | Method: {request.method} | IP: {request.remote_addr}"
    )
    return _error_response("Internal server error", 500)
