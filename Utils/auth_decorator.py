# Utils/auth_decorator.py
from functools import wraps
from flask import request, jsonify
from mongoengine.errors import ValidationError

from Utils.jwt_utils import decode_token
from Models.userModel import User
from Models.shopModel import Shop


def _extract_token(cookie_name):
    auth_header = request.headers.get("Authorization")
    token = None

    # Prefer Authorization header if present and well-formed
    if auth_header:
        try:
            token_type, token_val = auth_header.split(" ")
            if token_type.lower() == "bearer" and token_val:
                token = token_val
        except ValueError:
            pass

    # Fallback to cookies
    if not token:
        token = request.cookies.get(cookie_name)
    return token


def _load_principal(model, kind, cookie_name, label):
    """Return (principal, None) or (None, error response)."""
    token = _extract_token(cookie_name)
    if not token:
        return None, (jsonify({"success": False, "message": "Please login to continue"}), 401)

    decoded = decode_token(token)
    if not decoded or decoded.get("kind") != kind:
        return None, (jsonify({"success": False, "message": "Invalid or expired token"}), 401)

    try:
        principal = model.objects(id=decoded.get("id")).first()
    except ValidationError:
        principal = None
    if not principal:
        return None, (jsonify({"success": False, "message": f"{label} not found"}), 404)
    return principal, None


def token_required(f):
    """Ensure that a valid user JWT is present; passes the User first."""
    @wraps(f)
    def decorated(*args, **kwargs):
        user, error = _load_principal(User, "user", "token", "User")
        if error:
            return error
        return f(user, *args, **kwargs)

    return decorated


def seller_required(f):
    """Ensure that a valid seller JWT is present; passes the Shop first."""
    @wraps(f)
    def decorated(*args, **kwargs):
        seller, error = _load_principal(Shop, "seller", "seller_token", "Seller")
        if error:
            return error
        return f(seller, *args, **kwargs)

    return decorated


def roles_required(*allowed_roles):
    """
    Restrict access to users with specific roles.
    Example:
        withdraw_routes.add_url_rule(
            "/get-all-withdraw-request",
            view_func=roles_required("Admin")(get_all_withdraw_requests))
    """
    def wrapper(f):
        @wraps(f)
        @token_required
        def decorated(user, *args, **kwargs):
            if user.role_value not in allowed_roles:
                return jsonify({
                    "success": False,
                    "message": f"{user.role_value} can not access this resources!"
                }), 403

            return f(user, *args, **kwargs)

        return decorated
    return wrapper
