import jwt
from datetime import datetime, timedelta
from flask import current_app, jsonify, make_response


def _secret(key="JWT_SECRET"):
    return current_app.config[key]


def create_access_token(principal_id, kind, role):
    """
    Generate a JWT for a user or a seller.

    ``kind`` is ``"user"`` or ``"seller"`` so a token issued to one kind of
    principal is never accepted by the other guard.
    """
    now = datetime.utcnow()
    payload = {
        "id": str(principal_id),
        "kind": kind,
        "role": role,
        "exp": now + timedelta(days=current_app.config["JWT_EXPIRES_IN_DAYS"]),
        "iat": now,
    }
    return jwt.encode(payload, _secret(), algorithm="HS256")


def decode_token(token):
    """
    Verify and decode a JWT token.
    Returns payload dict if valid, or None if invalid/expired.
    """
    try:
        return jwt.decode(token, _secret(), algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def create_activation_token(data: dict, minutes=5):
    """Sign pending account data so it can be persisted after email confirmation."""
    payload = {**data, "exp": datetime.utcnow() + timedelta(minutes=minutes)}
    return jwt.encode(payload, _secret("ACTIVATION_SECRET"), algorithm="HS256")


def decode_activation_token(token):
    try:
        return jwt.decode(token, _secret("ACTIVATION_SECRET"), algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def send_token(principal, status_code, kind, cookie_name, key):
    """Issue a token for ``principal`` as JSON and as an HttpOnly cookie."""
    role = getattr(principal, "role_value", None) or principal.role
    token = create_access_token(principal.id, kind, role)
    resp = make_response(jsonify({
        "success": True,
        key: principal.to_json(),
        "token": token,
    }), status_code)
    resp.set_cookie(
        cookie_name, token,
        max_age=current_app.config["JWT_EXPIRES_IN_DAYS"] * 24 * 60 * 60,
        httponly=True,
        samesite="None" if current_app.config.get("COOKIE_SECURE") else "Lax",
        secure=bool(current_app.config.get("COOKIE_SECURE")),
    )
    return resp
