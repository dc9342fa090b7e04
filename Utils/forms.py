from datetime import datetime, timezone

from flask import request

from Utils.appError import AppError


def form_or_json():
    """Body fields of a multipart form or a JSON request as a plain dict."""
    if request.form:
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


def as_int(value, field):
    if value in (None, ""):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        raise AppError(f"{field} must be a number", 400)


def as_float(value, field):
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise AppError(f"{field} must be a number", 400)


def as_datetime(value, field):
    """Parse an ISO-8601 string into a naive UTC datetime."""
    if not value:
        raise AppError(f"{field} is required", 400)
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise AppError(f"Invalid date format for {field}", 400)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
