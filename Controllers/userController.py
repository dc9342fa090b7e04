import logging

from flask import request, jsonify, current_app, make_response
from mongoengine.errors import ValidationError, NotUniqueError

from Models.userModel import User, Address, Role
from Utils.appError import AppError
from Utils.auth_decorator import token_required, roles_required
from Utils.email import send_mail
from Utils.forms import form_or_json, as_int
from Utils.jwt_utils import create_activation_token, decode_activation_token, send_token
from Utils.uploads import save_image, delete_image

logger = logging.getLogger(__name__)


def _find_user(user_id):
    try:
        return User.objects(id=user_id).first()
    except ValidationError:
        return None


# =====================================================
# REGISTER (activation mail)
# =====================================================
def create_user():
    data = form_or_json()
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not all([name, email, password]):
        raise AppError("Please provide the all fields!", 400)
    if User.objects(email=email).first():
        raise AppError("User already exists", 400)

    avatar = "default.jpg"
    if "file" in request.files:
        avatar = save_image(request.files["file"])

    activation_token = create_activation_token({
        "name": name,
        "email": email,
        "password": User.hash_password(password),
        "avatar": avatar,
    })
    activation_url = f"{current_app.config['CLIENT_URL']}/activation/{activation_token}"

    try:
        send_mail(
            email=email,
            subject="Activate your account",
            message=f"Hello {name.split(' ')[0]}, please click on the link to activate your account: {activation_url}",
        )
    except Exception as e:
        logger.error(f"📧 Activation mail to {email} failed: {e}")
        delete_image(avatar)
        raise AppError(str(e), 500)

    logger.info(f"✉️ Activation link sent to {email}")
    return jsonify({
        "success": True,
        "message": f"please check your email:- {email} to activate your account!",
    }), 201


def activation():
    token = (request.get_json(silent=True) or {}).get("activation_token")
    new_user = decode_activation_token(token) if token else None
    if not new_user:
        raise AppError("Invalid token", 400)

    if User.objects(email=new_user["email"]).first():
        raise AppError("User already exists", 400)

    try:
        user = User(
            name=new_user["name"],
            email=new_user["email"],
            password=new_user["password"],
            avatar=new_user.get("avatar", "default.jpg"),
        )
        user.save()
    except NotUniqueError:
        raise AppError("User already exists", 400)

    logger.info(f"✅ New user activated: {user.email}")
    return send_token(user, 201, "user", "token", "user")


# =====================================================
# LOGIN / LOGOUT / CURRENT USER
# =====================================================
def login_user():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not email or not password:
        raise AppError("Please provide the all fields!", 400)

    user = User.objects(email=email).first()
    if not user:
        raise AppError("User doesn't exists!", 400)
    if not user.correct_password(password):
        raise AppError("Please provide the correct information", 400)

    logger.info(f"✅ Login successful for {email}")
    return send_token(user, 201, "user", "token", "user")


@token_required
def get_user(user):
    return jsonify({"success": True, "user": user.to_json()}), 200


def logout():
    resp = make_response(jsonify({"success": True, "message": "Log out successful!"}), 201)
    resp.delete_cookie("token")
    return resp


# =====================================================
# PROFILE
# =====================================================
@token_required
def update_user_info(user):
    data = request.get_json(silent=True) or {}
    if not user.correct_password(data.get("password")):
        raise AppError("Please provide the correct information", 400)

    email = (data.get("email") or "").strip().lower()
    if email and email != user.email:
        if User.objects(email=email, id__ne=user.id).first():
            raise AppError("Email already in use", 400)
        user.email = email
    if data.get("name"):
        user.name = data["name"]
    if "phoneNumber" in data:
        user.phone_number = as_int(data["phoneNumber"], "Phone number")
    user.save()

    return jsonify({"success": True, "user": user.to_json()}), 201


@token_required
def update_avatar(user):
    if "image" not in request.files:
        raise AppError("No image file provided", 400)

    filename = save_image(request.files["image"], owner_id=str(user.id))
    delete_image(user.avatar)
    user.avatar = filename
    user.save()

    return jsonify({"success": True, "user": user.to_json()}), 200


@token_required
def update_user_addresses(user):
    data = request.get_json(silent=True) or {}
    address_type = data.get("addressType")

    existing = user.find_address(data.get("_id")) if data.get("_id") else None
    if existing:
        existing.update_from(data)
    else:
        if any(a.address_type == address_type for a in user.addresses):
            raise AppError(f"{address_type} address already exists", 400)
        address = Address()
        address.update_from(data)
        user.addresses.append(address)
    user.save()

    return jsonify({"success": True, "user": user.to_json()}), 200


@token_required
def delete_user_address(user, address_id):
    user.addresses = [a for a in user.addresses if a.address_id != address_id]
    user.save()
    return jsonify({"success": True, "user": user.to_json()}), 200


@token_required
def update_user_password(user):
    data = request.get_json(silent=True) or {}
    if not user.correct_password(data.get("oldPassword")):
        raise AppError("Old password is incorrect!", 400)
    if not data.get("newPassword"):
        raise AppError("New password is required", 400)
    if data.get("newPassword") != data.get("confirmPassword"):
        raise AppError("Password doesn't matched with each other!", 400)

    user.set_password(data["newPassword"])
    user.save()
    logger.info(f"🔐 Password updated for {user.email}")

    return jsonify({"success": True, "message": "Password updated successfully!"}), 200


def user_info(user_id):
    user = _find_user(user_id)
    if not user:
        raise AppError("User not found", 404)
    return jsonify({"success": True, "user": user.to_json()}), 201


# =====================================================
# ADMIN
# =====================================================
@roles_required("Admin")
def admin_all_users(admin):
    users = User.objects(role__ne=Role.ADMIN).order_by("-created_at")
    return jsonify({"success": True, "users": [u.to_json() for u in users]}), 201


@roles_required("Admin")
def delete_user(admin, user_id):
    user = _find_user(user_id)
    if not user:
        raise AppError("User is not available with this id", 400)

    delete_image(user.avatar)
    user.delete()
    logger.info(f"🗑️ User {user_id} deleted by admin {admin.id}")

    return jsonify({"success": True, "message": "User deleted successfully!"}), 201
